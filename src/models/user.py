"""User model."""

import uuid

from sqlalchemy import Boolean, Column, String

from src.database import Base
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and admin privileges."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(100), nullable=False)
    mobile = Column(String(15), nullable=False)
    gender = Column(String(10), nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)
