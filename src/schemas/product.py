"""Product schemas."""

from datetime import datetime
from decimal import Decimal

from src.schemas.base import CamelModel


class ProductResponse(CamelModel):
    """Product as returned to clients, with its category name and absolute image URL."""

    id: str
    name: str
    category_id: str
    category_name: str | None
    description: str | None
    price: Decimal
    image_url: str | None
    created_at: datetime
    updated_at: datetime


class ProductCreateResponse(CamelModel):
    """Acknowledgement for a created product."""

    message: str
    product: ProductResponse
