"""SQLAlchemy engine and session factories built from Settings.

Repositories never call into this module: they are handed a session. These
factories are for the code that owns the unit of work (a request handler, a
script, a background job).
"""

from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Session, sessionmaker

from generic_repository.config import get_settings


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return create_engine(settings.database_url, echo=settings.echo_sql)


@lru_cache
def get_async_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(
        _get_async_url(settings.database_url),
        echo=settings.echo_sql,
    )


@lru_cache
def session_factory() -> sessionmaker[Session]:
    return sessionmaker(
        get_engine(),
        expire_on_commit=get_settings().expire_on_commit,
    )


@lru_cache
def async_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_async_engine(),
        class_=AsyncSession,
        expire_on_commit=get_settings().expire_on_commit,
    )


@contextmanager
def session_scope() -> Iterator[Session]:
    """One blocking session per unit of work; rolled back on error, always closed.

    Nothing is committed here; call ``save()`` on the repository.
    """
    with session_factory()() as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yields an async DB session per unit of work (usable as a framework dependency)."""
    async with async_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
