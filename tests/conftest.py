"""Pytest configuration for test suite."""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Generator

# Add project root to Python path
# This ensures 'app' module can be imported in tests
project_root = Path(__file__).parent.parent.resolve()
project_root_str = str(project_root)

# Add to sys.path if not already there
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Also set PYTHONPATH environment variable for subprocesses
os.environ.setdefault("PYTHONPATH", project_root_str)

# Keep test runs off the log directory and the real database
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.core.config import Settings  # noqa: E402
from app.core.database import Base, get_db  # noqa: E402
from app.core.security import AdminRole, TokenService  # noqa: E402
from app.main import create_app  # noqa: E402
from app.schemas.product_schemas import ProductCreate  # noqa: E402
from app.services.product_admin_service import ProductAdminService  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    """Settings with a fixed secret and no external services configured."""
    return Settings(
        auth_secret="test-secret",
        jwt_expires=60,
        refresh_token_time=600,
        google_client_id="client-123.apps.googleusercontent.com",
        cloudinary_cloud_name="demo-cloud",
        cloudinary_api_key="key-123",
        cloudinary_api_secret="secret-456",
        upload_folder="storefront-test",
        log_to_file=False,
    )


@pytest.fixture
def session_factory() -> sessionmaker:
    """In-memory SQLite shared across sessions through a single static connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app(settings: Settings, session_factory: sessionmaker):
    application = create_app(settings)

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app) -> TestClient:
    # Not used as a context manager, so the startup hook never touches a real database
    return TestClient(app)


@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    return TokenService(settings)


@pytest.fixture
def admin_headers(token_service: TokenService) -> Callable[..., dict]:
    """Build Authorization headers carrying an admin access token."""

    def _headers(role: AdminRole = AdminRole.ADMIN, admin_id: int = 1) -> dict:
        tokens = token_service.issue_admin_pair(str(admin_id), "admin@example.com", role.value)
        return {"Authorization": f"Bearer {tokens['access_token']}"}

    return _headers


@pytest.fixture
def make_product(db_session: Session) -> Callable[..., object]:
    """Create a product through the admin write path."""
    service = ProductAdminService()

    def _make(name: str = "Sample Product", **fields):
        fields.setdefault(
            "variants",
            [{"sku": f"{name[:8].upper()}-1", "price": 15, "quantity": 5}],
        )
        return service.create(db_session, ProductCreate(name=name, **fields))

    return _make
