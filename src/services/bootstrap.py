"""Startup initialization of the schema and the bootstrap administrator."""

import logging

from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from src.config import Settings, get_settings
from src.database import SessionLocal, engine, init_db
from src.models.user import User
from src.services.auth import get_password_hash, get_user_by_email

logger = logging.getLogger(__name__)


def ensure_admin_user(db: Session, settings: Settings) -> User:
    """Create the administrator account unless one with the configured email exists.

    Safe to run concurrently from several processes: losing the insert race
    to another process counts as success.
    """
    existing = get_user_by_email(db, settings.admin_email)
    if existing:
        logger.info(f"Admin user {settings.admin_email} already present")
        return existing

    admin = User(
        name=settings.admin_name,
        email=settings.admin_email,
        password_hash=get_password_hash(settings.admin_password),
        mobile="0000000000",
        gender="Other",
        is_admin=True,
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Admin user {settings.admin_email} created concurrently")
        return get_user_by_email(db, settings.admin_email)

    db.refresh(admin)
    logger.info(f"Admin user {settings.admin_email} created")
    return admin


def initialize_store(
    bind: Engine | None = None,
    session_factory: sessionmaker | None = None,
) -> None:
    """Create missing tables and the administrator. Idempotent."""
    settings = get_settings()
    init_db(bind or engine)

    if session_factory is None:
        session_factory = sessionmaker(bind=bind) if bind is not None else SessionLocal

    session = session_factory()
    try:
        ensure_admin_user(session, settings)
    finally:
        session.close()

    logger.info("Database initialized successfully")
