"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.schemas.base import CamelModel


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=100)
    password: str = Field(..., min_length=1, max_length=72)
    mobile: str = Field(..., min_length=1, max_length=15)
    gender: str = Field(..., min_length=1, max_length=10)


class UserLogin(BaseModel):
    """User login request.

    ``email`` is a plain string so a malformed address fails the same way as
    an unknown one.
    """

    email: str = Field(..., max_length=100)
    password: str = Field(..., max_length=72)


class UserResponse(CamelModel):
    """User information returned on login."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User record as listed to administrators (never includes the password hash)."""

    mobile: str
    gender: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Login response with token and user info."""

    token: str
    user: UserResponse


class TokenClaims(CamelModel):
    """Claims carried by an access token."""

    id: str
    is_admin: bool = False
