"""API-specific test fixtures."""

from contextlib import asynccontextmanager

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"


def _build_client(db_url: str, seed: bool) -> TestClient:
    from entitlements.api.routes import api_router
    from entitlements.db import close_db, init_db
    from entitlements.db.seed import seed_tiers
    from entitlements.main import register_exception_handlers
    from entitlements.middleware.correlation import setup_correlation_middleware

    @asynccontextmanager
    async def test_lifespan(app: FastAPI):
        """Initialize the database inside the TestClient's event loop."""
        import entitlements.db.base as db_mod

        db_mod._engine = None
        db_mod._session_factory = None
        await init_db(db_url)
        if seed:
            await seed_tiers()
        yield
        await close_db()

    app = FastAPI(title="Entitlements - Test Client", lifespan=test_lifespan)
    setup_correlation_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return TestClient(app)


@pytest.fixture
def api_client(db_url):
    """Test client over an empty tiers table."""
    with _build_client(db_url, seed=False) as client:
        yield client


@pytest.fixture
def seeded_client(db_url):
    """Test client over the baseline tiers (Free is the default)."""
    with _build_client(db_url, seed=True) as client:
        yield client


@pytest.fixture
def add_user():
    """Insert a user directly, returning its id. Usable while a client is open."""
    from entitlements.db.base import get_session_factory
    from entitlements.db.models.user import User

    def _add(client: TestClient, email: str, tier_id: int | None = None) -> int:
        async def _insert() -> int:
            async with get_session_factory()() as session:
                user = User(email=email, tier_id=tier_id)
                session.add(user)
                await session.commit()
                return user.id

        return client.portal.call(_insert)

    return _add
