"""Catalog store wiring.

Builds the async SQLAlchemy engine and session factory from settings and
exposes the unit-of-work session used by request handlers. The builders
are reused by the seed script and the test suite with other URLs.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from storefront.infrastructure.config import settings


class Base(DeclarativeBase):
    """Declarative base for catalog and audit tables."""


def build_engine(database_url: str, **options: Any) -> AsyncEngine:
    """Create an async engine for ``database_url``.

    SQLite files get a ``NullPool`` so each session opens its own
    connection; server databases keep a pre-pinged pool.

    Args:
        database_url: SQLAlchemy async URL.
        **options: Extra ``create_async_engine`` arguments; they win over
            the defaults above.

    Returns:
        Configured async engine.
    """
    options.setdefault("echo", settings.debug)
    if database_url.startswith("sqlite"):
        options.setdefault("poolclass", NullPool)
    else:
        options.setdefault("pool_pre_ping", True)
    return create_async_engine(database_url, **options)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory whose objects stay readable after commit."""
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url)
async_session_factory = create_session_factory(engine)


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Open a session that commits on success and rolls back on error.

    Args:
        factory: Session factory to draw from; the application's by default.

    Yields:
        AsyncSession bound to one transaction.
    """
    async with (factory or async_session_factory)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency wrapping each request in :func:`session_scope`."""
    async with session_scope() as session:
        yield session
