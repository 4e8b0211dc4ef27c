"""Pytest configuration and fixtures."""

import os
import shutil
import tempfile
from pathlib import Path

# The app reads its settings at import time, so configure it first.
# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    os.environ["DATABASE_URL"] = os.environ["DATABASE_URL"].replace(
        "/shop_admin", "/shop_admin_test"
    )
else:
    # Running locally - use SQLite
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"

UPLOAD_DIR = Path(tempfile.mkdtemp(prefix="shop-admin-uploads-"))
os.environ["UPLOAD_DIR"] = str(UPLOAD_DIR)
os.environ["SERVER_URL"] = "http://testserver"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "admin123"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.database import Base, SessionLocal, engine, get_db  # noqa: E402
from src.main import app  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    shutil.rmtree(UPLOAD_DIR, ignore_errors=True)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = SessionLocal()

    yield session

    # Clean up all data and uploaded files after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()

    for path in UPLOAD_DIR.iterdir():
        path.unlink()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client, email: str, password: str) -> AuthHeaders:
    """Log in and return bearer headers for the user."""
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def auth_headers(client):
    """Register a regular user and return auth headers with user info."""
    response = client.post(
        "/api/register",
        json={
            "name": "Test User",
            "email": "test@example.com",
            "password": "testpass123",
            "mobile": "5551234567",
            "gender": "Female",
        },
    )
    assert response.status_code == 200

    return login(client, "test@example.com", "testpass123")


@pytest.fixture
def admin_headers(client):
    """Auth headers for the bootstrap administrator."""
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def category_id(client, admin_headers):
    """Create a category and return its id."""
    response = client.post(
        "/api/categories",
        headers=admin_headers,
        json={"name": "Electronics", "description": "Gadgets and devices"},
    )
    assert response.status_code == 200
    return response.json()["categoryId"]
