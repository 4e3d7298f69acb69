"""Shared fixtures. Each test gets its own SQLite file with the schema created."""

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import Session

from generic_repository.infrastructure.database import Base
from generic_repository.infrastructure.database.repositories import (
    AsyncSQLAlchemyRepository,
    SQLAlchemyRepository,
)

# registers the test tables on Base.metadata
import tests.models  # noqa: F401,E402


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'repository.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def repo(session) -> SQLAlchemyRepository:
    return SQLAlchemyRepository(session)


@pytest.fixture
def other_session(engine):
    """A second, independent unit of work against the same database."""
    with Session(engine) as session:
        yield session


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'repository.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine):
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def async_repo(async_session) -> AsyncSQLAlchemyRepository:
    return AsyncSQLAlchemyRepository(async_session)
