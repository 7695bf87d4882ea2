"""
Pytest configuration and fixtures for registry tests.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.config import Settings, get_settings
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services.registry_service import RegistryService

TEST_AUTHORITY = "registry-authority"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Get test settings."""
    return Settings(
        DEV_MODE=True,
        DEV_USER_ID="test-user-001",
        REGISTRY_AUTHORITY=TEST_AUTHORITY,
    )


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Create a test database engine backed by a per-test SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def registry_authority() -> str:
    """Authority recorded by test registries."""
    return TEST_AUTHORITY


@pytest_asyncio.fixture(scope="function")
async def registry(db_session) -> RegistryService:
    """Registry service bound to the test session."""
    return RegistryService(db_session, authority=TEST_AUTHORITY)


@pytest_asyncio.fixture(scope="function")
async def client(session_factory, test_settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client.

    Each request gets its own session, committed on success and rolled
    back on error, the same way the production get_db dependency works.
    """

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_asset_data() -> dict[str, Any]:
    """Sample registration body."""
    return {
        "name": "turbine-blade-scan",
        "payloadSize": 2048,
        "attributeSchema": "schema://mesh/v1",
        "tags": ["cad", "turbine"],
    }


def as_principal(principal: str) -> dict[str, str]:
    """Headers that make the dev-mode client act as principal."""
    return {"X-Principal": principal}


@pytest.fixture
def alice() -> dict[str, str]:
    return as_principal("alice")


@pytest.fixture
def bob() -> dict[str, str]:
    return as_principal("bob")


@pytest.fixture
def carol() -> dict[str, str]:
    return as_principal("carol")
