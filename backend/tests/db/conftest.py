"""Database fixtures backed by a throwaway SQLite file (aiosqlite)."""

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from entitlements.db.base import Base, build_engine


@pytest.fixture
async def engine(tmp_path) -> AsyncEngine:
    """Create a SQLite engine with all tables."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'entitlements.db'}")

    # Import all models so metadata is populated
    import entitlements.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session
