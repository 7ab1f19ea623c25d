from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class AlbumCreate(BaseModel):
    userId: int
    title: str
    description: Optional[str] = None
    photoIds: List[int] = []
    coverPhoto: Optional[int] = None


class AlbumUpdate(BaseModel):
    # no shareId: it is fixed when the album is created
    title: Optional[str] = None
    description: Optional[str] = None
    photoIds: Optional[List[int]] = None
    coverPhoto: Optional[int] = None


class AlbumOut(BaseModel):
    id: int
    userId: int
    title: str
    description: Optional[str] = None
    photoIds: List[int] = []
    coverPhoto: Optional[int] = None
    shareId: str
    createdAt: datetime
