from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from photoalbum.db import BaseStore, get_store
from photoalbum.models.photo import PhotoCreate, PhotoOut, PhotoUpdate
from photoalbum.repositories.photos import PhotoRepository


router = APIRouter(prefix="/photos", tags=["photos"])


@router.get("", response_model=List[PhotoOut])
def list_photos(
    userId: Optional[int] = None,
    albumId: Optional[int] = None,
    q: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma-separated, all must match"),
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    favorite: Optional[bool] = None,
    store: BaseStore = Depends(get_store),
):
    return PhotoRepository(store).list(
        user_id=userId,
        album_id=albumId,
        query=q,
        tags=tags.split(",") if tags else None,
        start=start,
        end=end,
        favorite=favorite,
    )


@router.post("", response_model=PhotoOut, status_code=status.HTTP_201_CREATED)
def create_photo(payload: PhotoCreate, store: BaseStore = Depends(get_store)):
    return PhotoRepository(store).create(payload.model_dump())


@router.get("/{photo_id}", response_model=PhotoOut)
def get_photo(photo_id: int, store: BaseStore = Depends(get_store)):
    return PhotoRepository(store).get(photo_id)


@router.put("/{photo_id}", response_model=PhotoOut)
def update_photo(photo_id: int, payload: PhotoUpdate, store: BaseStore = Depends(get_store)):
    return PhotoRepository(store).update(photo_id, payload.model_dump(exclude_unset=True))


@router.delete("/{photo_id}")
def delete_photo(photo_id: int, store: BaseStore = Depends(get_store)):
    PhotoRepository(store).delete(photo_id)
    return {"success": True}
