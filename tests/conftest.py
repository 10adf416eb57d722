"""Pytest configuration and fixtures."""

import os

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_image_service
from src.config import Settings
from src.database import Base, get_db
from src.main import app
from src.models.user import User
from src.services.auth import create_access_token
from src.services.image_service import ImageService


class AuthHeaders(dict):
    """Dict subclass that also stores user info."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/recipe_share", "/recipe_share_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

CSV_HEADER = "Country,Recipe Title,Intro,Ingredients,Method,Helpful Notes,Image url,Keywords\n"


def make_csv(*rows: str) -> str:
    """Build a feed with the standard header from pre-formatted data lines."""
    return CSV_HEADER + "".join(f"{row}\n" for row in rows)


def image_service_with(handler=None, s3_client=None, **settings_overrides) -> ImageService:
    """Image service with a mocked HTTP transport and no S3 bucket unless given."""
    settings_overrides.setdefault("aws_s3_bucket_name", None)
    settings = Settings(**settings_overrides)
    http_client = httpx.Client(transport=httpx.MockTransport(handler)) if handler else None
    return ImageService(settings=settings, http_client=http_client, s3_client=s3_client)


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
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database and image service overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    def override_get_image_service():
        yield image_service_with()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_service] = override_get_image_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def author(db):
    """A user that imported recipes can be attributed to."""
    user = User(email="importer@example.com", name="Importer", password_hash="fake")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def auth_headers(client):
    """Create a regular user and return auth headers with user info."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "test@example.com", "password": "testpass123", "name": "Test User"},
    )
    assert response.status_code == 201
    data = response.json()
    token = data["access_token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def admin_headers(client, db):
    """Create an admin user and return auth headers with user info."""
    admin = User(email="admin@example.com", name="Admin", password_hash="fake", is_admin=True)
    db.add(admin)
    db.commit()
    db.refresh(admin)

    token = create_access_token(admin.id, admin.email)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=admin.id, email=admin.email)


@pytest.fixture
def csv_feed():
    """Factory for CSV feeds with the standard header."""
    return make_csv


@pytest.fixture
def make_image_service():
    """Factory for image services backed by a mock HTTP transport."""
    return image_service_with
