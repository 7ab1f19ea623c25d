from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from photoalbum.db import BaseStore, get_store
from photoalbum.models.user import LoginRequest, TokenOut, UserOut
from photoalbum.repositories.users import UserRepository
from photoalbum.utils.security import create_access_token, get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
def login(payload: LoginRequest, store: BaseStore = Depends(get_store)):
    user = UserRepository(store).verify_credentials(payload.email, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(user["id"])
    return {"access_token": token, "token_type": "bearer", "user": user}


@router.get("/me", response_model=UserOut)
def me(current_user: Dict[str, Any] = Depends(get_current_user)):
    return current_user
