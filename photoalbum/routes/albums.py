from typing import List, Optional

from fastapi import APIRouter, Depends, status

from photoalbum.db import BaseStore, get_store
from photoalbum.models.album import AlbumCreate, AlbumOut, AlbumUpdate
from photoalbum.repositories.albums import AlbumRepository


router = APIRouter(prefix="/albums", tags=["albums"])


@router.get("", response_model=List[AlbumOut])
def list_albums(userId: Optional[int] = None, store: BaseStore = Depends(get_store)):
    return AlbumRepository(store).list(user_id=userId)


@router.post("", response_model=AlbumOut, status_code=status.HTTP_201_CREATED)
def create_album(payload: AlbumCreate, store: BaseStore = Depends(get_store)):
    return AlbumRepository(store).create(payload.model_dump())


@router.get("/{album_id}", response_model=AlbumOut)
def get_album(album_id: int, store: BaseStore = Depends(get_store)):
    return AlbumRepository(store).get(album_id)


@router.put("/{album_id}", response_model=AlbumOut)
def update_album(album_id: int, payload: AlbumUpdate, store: BaseStore = Depends(get_store)):
    return AlbumRepository(store).update(album_id, payload.model_dump(exclude_unset=True))


@router.delete("/{album_id}")
def delete_album(album_id: int, store: BaseStore = Depends(get_store)):
    AlbumRepository(store).delete(album_id)
    return {"success": True}
