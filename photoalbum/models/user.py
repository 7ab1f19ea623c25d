from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator


def check_email_format(value: str) -> str:
    """Reject malformed addresses but keep the submitted spelling.

    Lookups and uniqueness are exact string matches, so the address is
    stored as given rather than in its normalized form.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


class UserCreate(BaseModel):
    username: Optional[str] = None
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return check_email_format(v)


class UserOut(BaseModel):
    id: int
    username: Optional[str] = None
    email: str
    createdAt: Optional[datetime] = None


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return check_email_format(v)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
