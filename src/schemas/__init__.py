"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    TokenClaims,
    UserDetailResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.base import MessageResponse
from src.schemas.category import (
    CategoryCreate,
    CategoryCreateResponse,
    CategoryResponse,
    CategoryUpdate,
)
from src.schemas.product import ProductCreateResponse, ProductResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "UserDetailResponse",
    "AuthResponse",
    "TokenClaims",
    "MessageResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryCreateResponse",
    "ProductResponse",
    "ProductCreateResponse",
]
