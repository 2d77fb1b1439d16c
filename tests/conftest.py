"""Shared fixtures: a throwaway SQLite catalog per test."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.catalog import models as catalog_models  # noqa: F401
from storefront.infrastructure import models as infrastructure_models  # noqa: F401
from storefront.infrastructure.config import ApiKeyGrant, settings
from storefront.infrastructure.database import (
    Base,
    build_engine,
    create_session_factory,
    get_session,
    session_scope,
)
from storefront.main import app

ADMIN_API_KEY = next(
    key for key, grant in settings.api_keys.items() if grant.role == "superadmin"
)
VIEWER_API_KEY = "test-viewer-key"


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Create the catalog schema in a fresh SQLite file."""
    path = tmp_path / "catalog.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def session_factory(database_path: Path) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return create_session_factory(build_engine(f"sqlite+aiosqlite:///{database_path}"))


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def override_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> Generator[None, None, None]:
    """Route the app's session dependency to the test database."""

    async def _get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def client(override_session: None) -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Get authentication headers for the superadmin key."""
    return {"Authorization": f"Bearer {ADMIN_API_KEY}"}


@pytest.fixture
def admin_client(override_session: None, admin_headers: dict[str, str]) -> TestClient:
    """Create test client authenticated with the superadmin key."""
    return TestClient(app, headers=admin_headers)


@pytest.fixture
def viewer_client(override_session: None, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    """Create test client authenticated with a non-admin role."""
    monkeypatch.setitem(
        settings.api_keys,
        VIEWER_API_KEY,
        ApiKeyGrant(role="viewer", subject="viewer@example.com"),
    )
    return TestClient(app, headers={"Authorization": f"Bearer {VIEWER_API_KEY}"})
