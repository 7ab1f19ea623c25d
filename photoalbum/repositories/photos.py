import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from photoalbum import consistency
from photoalbum.errors import ValidationError
from photoalbum.repositories.base import Record, Repository, next_id, utc_now_iso


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("userId", "title", "filename", "filepath")
# albumIds only changes through album create/update/delete
UPDATABLE_FIELDS = ("title", "description", "tags", "filename", "filepath", "uploadDate", "isFavorite")
NULLABLE_FIELDS = ("description",)


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    out: List[str] = []
    for tag in tags or []:
        tag = str(tag).strip().lower()
        if tag and tag not in out:
            out.append(tag)
    return out


def parse_timestamp(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _timestamp_string(value: str | datetime) -> str:
    try:
        parsed = parse_timestamp(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid uploadDate: {value}") from exc
    return parsed.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class PhotoRepository(Repository):
    collection = "photos"
    label = "Photo"

    def list(
        self,
        user_id: Optional[int] = None,
        album_id: Optional[int] = None,
        query: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        favorite: Optional[bool] = None,
    ) -> List[Record]:
        wanted_tags = normalize_tags(tags)
        needle = query.lower() if query else None
        start = parse_timestamp(start) if start else None
        end = parse_timestamp(end) if end else None

        def matches(photo: Record) -> bool:
            if user_id is not None and photo.get("userId") != user_id:
                return False
            if album_id is not None and album_id not in photo.get("albumIds", []):
                return False
            if needle:
                title = (photo.get("title") or "").lower()
                description = (photo.get("description") or "").lower()
                if needle not in title and needle not in description:
                    return False
            if wanted_tags:
                photo_tags = [t.lower() for t in photo.get("tags") or []]
                if not all(t in photo_tags for t in wanted_tags):
                    return False
            if favorite is not None and bool(photo.get("isFavorite")) != favorite:
                return False
            if start or end:
                uploaded = parse_timestamp(photo["uploadDate"])
                if start and uploaded < start:
                    return False
                if end and uploaded > end:
                    return False
            return True

        return super().list(matches)

    def create(self, data: Dict[str, Any]) -> Record:
        missing = [f for f in REQUIRED_FIELDS if data.get(f) in (None, "")]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        with self.store.transaction() as document:
            photos = document["photos"]
            photo = {
                "id": next_id(photos),
                "userId": data["userId"],
                "title": data["title"],
                "description": data.get("description"),
                "tags": normalize_tags(data.get("tags")),
                "filename": data["filename"],
                "filepath": data["filepath"],
                "uploadDate": _timestamp_string(data["uploadDate"]) if data.get("uploadDate") else utc_now_iso(),
                "albumIds": [],
                "isFavorite": bool(data.get("isFavorite", False)),
            }
            photos.append(photo)
        logger.info("Created photo %s for user %s", photo["id"], photo["userId"])
        return dict(photo)

    def update(self, photo_id: int, data: Dict[str, Any]) -> Record:
        changes = {
            k: v for k, v in data.items()
            if k in UPDATABLE_FIELDS and (v is not None or k in NULLABLE_FIELDS)
        }
        if "title" in changes and not changes["title"]:
            raise ValidationError("Photo title cannot be empty")
        if "tags" in changes:
            changes["tags"] = normalize_tags(changes["tags"])
        if "uploadDate" in changes:
            changes["uploadDate"] = _timestamp_string(changes["uploadDate"])
        with self.store.transaction() as document:
            photos = document["photos"]
            index = self._locate(document, photo_id)
            photos[index] = {**photos[index], **changes, "id": photo_id}
            photo = photos[index]
        logger.info("Updated photo %s fields=%s", photo_id, sorted(changes))
        return dict(photo)

    def delete(self, photo_id: int) -> None:
        with self.store.transaction() as document:
            self._delete(document, photo_id)
            consistency.detach_photo(document, photo_id)
