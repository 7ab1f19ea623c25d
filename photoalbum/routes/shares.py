from fastapi import APIRouter, Depends

from photoalbum.db import BaseStore, get_store
from photoalbum.models.share import SharedAlbumOut
from photoalbum.repositories.shares import ShareRepository


router = APIRouter(prefix="/shares", tags=["shares"])


@router.get("/{share_id}", response_model=SharedAlbumOut)
def open_share(share_id: str, store: BaseStore = Depends(get_store)):
    # Public link: no authentication, expiresAt is not checked
    return ShareRepository(store).resolve(share_id)
