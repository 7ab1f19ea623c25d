"""Keeps ``album.photoIds`` and ``photo.albumIds`` mirror images of each other.

All functions mutate a loaded document in place and are meant to run inside
a single store transaction, so the two sides of a link never diverge in what
gets persisted.
"""
from typing import Any, Dict, Iterable, List, Tuple

from photoalbum.db import Document


def _photos_by_id(document: Document) -> Dict[int, Dict[str, Any]]:
    return {photo["id"]: photo for photo in document["photos"]}


def existing_photo_ids(document: Document, photo_ids: Iterable[int]) -> List[int]:
    """Drop unknown and repeated ids, keeping first-seen order."""
    known = _photos_by_id(document)
    kept: List[int] = []
    for photo_id in photo_ids:
        if photo_id in known and photo_id not in kept:
            kept.append(photo_id)
    return kept


def link_photos(document: Document, album_id: int, photo_ids: Iterable[int]) -> None:
    photos = _photos_by_id(document)
    for photo_id in photo_ids:
        photo = photos.get(photo_id)
        if photo is None:
            continue
        album_ids = photo.setdefault("albumIds", [])
        if album_id not in album_ids:
            album_ids.append(album_id)


def unlink_photos(document: Document, album_id: int, photo_ids: Iterable[int]) -> None:
    photos = _photos_by_id(document)
    for photo_id in photo_ids:
        photo = photos.get(photo_id)
        if photo is None:
            continue
        photo["albumIds"] = [a for a in photo.get("albumIds", []) if a != album_id]


def sync_album_photos(document: Document, album: Dict[str, Any], new_photo_ids: List[int]) -> None:
    old_photo_ids = album.get("photoIds", [])
    removed = [p for p in old_photo_ids if p not in new_photo_ids]
    added = [p for p in new_photo_ids if p not in old_photo_ids]
    unlink_photos(document, album["id"], removed)
    link_photos(document, album["id"], added)


def detach_album(document: Document, album_id: int) -> None:
    for photo in document["photos"]:
        if album_id in photo.get("albumIds", []):
            photo["albumIds"] = [a for a in photo["albumIds"] if a != album_id]
    document["shares"] = [s for s in document["shares"] if s.get("albumId") != album_id]


def detach_photo(document: Document, photo_id: int) -> None:
    for album in document["albums"]:
        if photo_id in album.get("photoIds", []):
            album["photoIds"] = [p for p in album["photoIds"] if p != photo_id]
        if album.get("coverPhoto") == photo_id:
            album["coverPhoto"] = album["photoIds"][0] if album.get("photoIds") else None


def find_violations(document: Document) -> List[Tuple[str, int, int]]:
    """List one-sided links as ``(kind, album_id, photo_id)``.

    ``kind`` is ``"album"`` when only the album lists the photo and
    ``"photo"`` when only the photo lists the album.
    """
    photos = _photos_by_id(document)
    albums = {album["id"]: album for album in document["albums"]}
    violations: List[Tuple[str, int, int]] = []
    for album in document["albums"]:
        for photo_id in album.get("photoIds", []):
            photo = photos.get(photo_id)
            if photo is None or album["id"] not in photo.get("albumIds", []):
                violations.append(("album", album["id"], photo_id))
    for photo in document["photos"]:
        for album_id in photo.get("albumIds", []):
            album = albums.get(album_id)
            if album is None or photo["id"] not in album.get("photoIds", []):
                violations.append(("photo", album_id, photo["id"]))
    return violations


def repair(document: Document) -> int:
    """Make every link two-sided again, trusting the albums' photo lists.

    Returns the number of violations that were fixed.
    """
    violations = find_violations(document)
    for album in document["albums"]:
        album["photoIds"] = existing_photo_ids(document, album.get("photoIds", []))
        if album.get("coverPhoto") not in album["photoIds"]:
            album["coverPhoto"] = album["photoIds"][0] if album["photoIds"] else None
    for photo in document["photos"]:
        photo["albumIds"] = []
    for album in document["albums"]:
        link_photos(document, album["id"], album["photoIds"])
    return len(violations)
