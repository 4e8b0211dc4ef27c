"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.database import get_db
from src.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from src.schemas.base import MessageResponse
from src.services.auth import authenticate_user, create_access_token, register_user

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=MessageResponse)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new (non-admin) user."""
    register_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        mobile=user_data.mobile,
        gender=user_data.gender,
    )
    return MessageResponse(message="Registration successful")


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    return AuthResponse(
        token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )
