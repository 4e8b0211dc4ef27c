"""Category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.base import CamelModel


class CategoryCreate(BaseModel):
    """Create a new category."""

    name: str = Field(..., max_length=100)
    description: str | None = None


class CategoryUpdate(BaseModel):
    """Replace a category's name and description."""

    name: str = Field(..., max_length=100)
    description: str | None = None


class CategoryResponse(CamelModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime


class CategoryCreateResponse(CamelModel):
    """Acknowledgement for a created category."""

    message: str
    category_id: str
