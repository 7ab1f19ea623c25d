import logging
from typing import Any, Dict, List, Optional

from photoalbum import consistency
from photoalbum.errors import NotFound, ValidationError
from photoalbum.repositories.base import Record, Repository, next_id, utc_now_iso
from photoalbum.repositories.shares import ShareRepository, make_share_id


logger = logging.getLogger(__name__)

# id, userId, shareId and createdAt are fixed at creation
UPDATABLE_FIELDS = ("title", "description", "photoIds", "coverPhoto")


def _pick_cover(photo_ids: List[int], requested: Any) -> Optional[int]:
    if requested is not None:
        if requested not in photo_ids:
            raise ValidationError("Cover photo must be one of the album's photos")
        return requested
    return photo_ids[0] if photo_ids else None


class AlbumRepository(Repository):
    collection = "albums"
    label = "Album"

    def list(self, user_id: Optional[int] = None) -> List[Record]:
        if user_id is None:
            return super().list()
        return super().list(lambda a: a.get("userId") == user_id)

    def get_by_share_id(self, share_id: str) -> Record:
        matches = super().list(lambda a: a.get("shareId") == share_id)
        if not matches:
            raise NotFound("Album not found")
        return matches[0]

    def create(self, data: Dict[str, Any]) -> Record:
        title = (data.get("title") or "").strip()
        if not title:
            raise ValidationError("Album title is required")
        if not data.get("photoIds"):
            raise ValidationError("Please select at least one photo for the album")
        if data.get("userId") is None:
            raise ValidationError("Missing required fields: userId")

        with self.store.transaction() as document:
            albums = document["albums"]
            photo_ids = consistency.existing_photo_ids(document, data["photoIds"])
            if not photo_ids:
                raise ValidationError("Please select at least one existing photo for the album")
            album = {
                "id": next_id(albums),
                "userId": data["userId"],
                "title": title,
                "description": data.get("description"),
                "photoIds": photo_ids,
                "coverPhoto": _pick_cover(photo_ids, data.get("coverPhoto")),
                "shareId": make_share_id(title),
                "createdAt": utc_now_iso(),
            }
            albums.append(album)
            ShareRepository.create(document, album)
            consistency.link_photos(document, album["id"], photo_ids)
        logger.info("Created album %s with %d photos (share %s)",
                    album["id"], len(photo_ids), album["shareId"])
        return dict(album)

    def update(self, album_id: int, data: Dict[str, Any]) -> Record:
        changes = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
        if "title" in changes:
            changes["title"] = (changes["title"] or "").strip()
            if not changes["title"]:
                raise ValidationError("Album title cannot be empty")

        with self.store.transaction() as document:
            albums = document["albums"]
            index = self._locate(document, album_id)
            current = albums[index]

            if changes.get("photoIds") is not None:
                new_photo_ids = consistency.existing_photo_ids(document, changes["photoIds"])
                consistency.sync_album_photos(document, current, new_photo_ids)
                changes["photoIds"] = new_photo_ids
            else:
                changes.pop("photoIds", None)

            photo_ids = changes.get("photoIds", current.get("photoIds", []))
            if changes.get("coverPhoto") is not None:
                changes["coverPhoto"] = _pick_cover(photo_ids, changes["coverPhoto"])
            elif current.get("coverPhoto") not in photo_ids:
                changes["coverPhoto"] = _pick_cover(photo_ids, None)
            else:
                changes.pop("coverPhoto", None)

            albums[index] = {
                **current,
                **changes,
                "id": album_id,
                "shareId": current.get("shareId"),
            }
            album = albums[index]
        logger.info("Updated album %s fields=%s", album_id, sorted(changes))
        return dict(album)

    def delete(self, album_id: int) -> None:
        with self.store.transaction() as document:
            self._delete(document, album_id)
            consistency.detach_album(document, album_id)
