# instashare/schemas/auth_schema.py
from pydantic import BaseModel, field_validator
from typing import Optional

from .user_schema import UserOut


class SignupRequest(BaseModel):
    username: str
    password: str
    fullname: str
    imgUrl: Optional[str] = None
    bio: Optional[str] = None
    gender: Optional[str] = None
    customGender: Optional[str] = None
    mobileOrEmail: Optional[str] = None
    website: Optional[str] = None

    @field_validator("username", "fullname", mode="before")
    @classmethod
    def _trim_required(cls, v):
        v = str(v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("password")
    @classmethod
    def _non_empty_password(cls, v):
        if not v:
            raise ValueError("password is required")
        return v


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: UserOut
