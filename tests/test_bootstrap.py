"""Startup initialization tests."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import SessionLocal, engine
from src.models.user import User
from src.services.auth import get_user_by_email, verify_password
from src.services.bootstrap import ensure_admin_user, initialize_store


def test_initialize_store_creates_admin(db):
    """Test a fresh store gets exactly one administrator."""
    settings = get_settings()

    initialize_store(engine, SessionLocal)

    admins = db.query(User).filter(User.email == settings.admin_email).all()
    assert len(admins) == 1
    assert admins[0].is_admin is True
    assert verify_password(settings.admin_password, admins[0].password_hash)


def test_initialize_store_is_idempotent(db):
    """Test repeated startups neither fail nor duplicate the administrator."""
    initialize_store(engine, SessionLocal)
    initialize_store(engine, SessionLocal)
    initialize_store(engine, SessionLocal)

    assert db.query(User).filter(User.is_admin.is_(True)).count() == 1


def test_ensure_admin_user_keeps_existing_record(db):
    """Test an existing admin record is returned untouched."""
    settings = get_settings()

    first = ensure_admin_user(db, settings)
    original_hash = first.password_hash
    second = ensure_admin_user(db, settings)

    assert second.id == first.id
    assert second.password_hash == original_hash


def test_admin_can_log_in_after_startup(client):
    """Test the application lifespan bootstraps a usable admin account."""
    settings = get_settings()
    response = client.post(
        "/api/login",
        json={"email": settings.admin_email, "password": settings.admin_password},
    )
    assert response.status_code == 200
    assert response.json()["user"]["isAdmin"] is True


def test_ensure_admin_user_tolerates_concurrent_insert(db, monkeypatch):
    """Test losing the insert race to another process counts as success."""
    settings = get_settings()
    existing = ensure_admin_user(db, settings)

    lookups = []

    def stale_lookup(session, email):
        # The first lookup misses the admin another process just inserted
        lookups.append(email)
        if len(lookups) == 1:
            return None
        return get_user_by_email(session, email)

    monkeypatch.setattr("src.services.bootstrap.get_user_by_email", stale_lookup)

    admin = ensure_admin_user(db, settings)

    assert admin.id == existing.id
    assert db.query(User).filter(User.email == settings.admin_email).count() == 1


def test_initialize_store_uses_the_given_engine(db, tmp_path):
    """Test passing only an engine creates the admin in that database."""
    settings = get_settings()
    other_engine = create_engine(f"sqlite:///{tmp_path / 'other.db'}")
    try:
        initialize_store(other_engine)

        with Session(other_engine) as other:
            admin = other.query(User).filter(User.email == settings.admin_email).one()
            assert admin.is_admin is True
    finally:
        other_engine.dispose()

    assert db.query(User).filter(User.email == settings.admin_email).count() == 0
