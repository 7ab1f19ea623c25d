from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PhotoCreate(BaseModel):
    userId: int
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    tags: List[str] = []
    filename: str = Field(..., min_length=1)
    filepath: str = Field(..., min_length=1)
    uploadDate: Optional[datetime] = None
    isFavorite: bool = False


class PhotoUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    filename: Optional[str] = None
    filepath: Optional[str] = None
    uploadDate: Optional[datetime] = None
    isFavorite: Optional[bool] = None


class PhotoOut(BaseModel):
    id: int
    userId: int
    title: str
    description: Optional[str] = None
    tags: List[str] = []
    filename: str
    filepath: str
    uploadDate: datetime
    albumIds: List[int] = []
    isFavorite: bool = False
