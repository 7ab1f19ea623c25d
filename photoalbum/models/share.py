from typing import List

from pydantic import BaseModel

from photoalbum.models.album import AlbumOut
from photoalbum.models.photo import PhotoOut


class SharedAlbumOut(BaseModel):
    album: AlbumOut
    photos: List[PhotoOut]
