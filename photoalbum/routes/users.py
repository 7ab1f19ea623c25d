from typing import List, Optional, Union

from fastapi import APIRouter, Depends, status

from photoalbum.db import BaseStore, get_store
from photoalbum.models.user import UserCreate, UserOut
from photoalbum.repositories.users import UserRepository


router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Union[List[UserOut], UserOut, None])
def list_users(email: Optional[str] = None, store: BaseStore = Depends(get_store)):
    users = UserRepository(store)
    if email is not None:
        return users.get_by_email(email)
    return users.list()


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, store: BaseStore = Depends(get_store)):
    return UserRepository(store).create(payload.model_dump())


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, store: BaseStore = Depends(get_store)):
    return UserRepository(store).get(user_id)
