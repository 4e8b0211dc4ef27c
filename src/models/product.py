"""Product model."""

import uuid

from sqlalchemy import Column, Numeric, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


class Product(Base, TimestampMixin):
    """Catalog product.

    ``category_id`` is a plain column rather than a foreign key: products look
    their category up with an outer join, and deleting a category is guarded
    by an explicit check in the catalog service.
    """

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    category_id = Column(String(36), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String(255), nullable=True)  # "/uploads/<filename>"
