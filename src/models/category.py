"""Category model."""

import uuid

from sqlalchemy import Column, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Category model for grouping catalog products."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
