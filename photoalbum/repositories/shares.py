import re
import uuid
from typing import Any, Dict, List, Optional

from photoalbum.db import Document
from photoalbum.errors import NotFound
from photoalbum.repositories.base import Record, Repository


def make_share_id(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]", "-", title.lower())
    return f"{slug}-{uuid.uuid4().hex[:8]}"


class ShareRepository(Repository):
    collection = "shares"
    label = "Share"

    def list(self, album_id: Optional[int] = None) -> List[Record]:
        if album_id is None:
            return super().list()
        return super().list(lambda s: s.get("albumId") == album_id)

    @staticmethod
    def create(document: Document, album: Record) -> Record:
        """Append the share for a freshly created album to ``document``."""
        share = {
            "id": album["shareId"],
            "albumId": album["id"],
            "createdAt": album["createdAt"],
            # stored for forward compatibility, not enforced
            "expiresAt": None,
        }
        document["shares"].append(share)
        return share

    def resolve(self, share_id: str) -> Dict[str, Any]:
        """Return the shared album and its photos, in album order."""
        document = self.store.read()
        share = document["shares"][self._locate(document, share_id)]
        album = next(
            (a for a in document["albums"] if a["id"] == share["albumId"]), None)
        if album is None:
            raise NotFound("Shared album not found")
        photos = {p["id"]: p for p in document["photos"]}
        return {
            "album": dict(album),
            "photos": [dict(photos[p]) for p in album.get("photoIds", []) if p in photos],
        }
