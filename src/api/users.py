"""User administration endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.api.dependencies import require_admin
from src.database import get_db
from src.schemas.auth import TokenClaims, UserDetailResponse
from src.services.auth import list_users

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserDetailResponse])
def get_users(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
):
    """List all users without their password hashes."""
    return list_users(db)
