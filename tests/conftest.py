import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from order_media_client import config as config_module
from order_media_client.auth import AuthService
from order_media_client.client import BackendClient
from order_media_client.config import AuthConfig, UploadConfig
from order_media_client.db.base import Base

from .fakes import (
    FakeClock,
    FakeFileRepository,
    FakeOrderRepository,
    FakeSellerRepository,
    FakeStorage,
    FakeUserRepository,
    InMemoryTables,
)

TEST_AUTH = AuthConfig(secret_key="test-secret", access_token_expire_minutes=5)


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    """Каждый тест читает окружение заново."""
    monkeypatch.setattr(config_module, "_cached_settings", None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tables(clock) -> InMemoryTables:
    return InMemoryTables(clock)


@pytest.fixture
def storage(clock) -> FakeStorage:
    return FakeStorage(clock)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def backend(tables, storage, user_repo) -> BackendClient:
    """BackendClient целиком в памяти."""
    return BackendClient(
        orders=FakeOrderRepository(tables),
        files=FakeFileRepository(tables),
        sellers=FakeSellerRepository(),
        storage=storage,
        auth=AuthService(user_repo, TEST_AUTH),
        uploads=UploadConfig(),
    )


@pytest_asyncio.fixture
async def session_factory():
    """
    SQLite в памяти с одной общей связью: таблицы создаются
    перед тестом и удаляются после.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, expire_on_commit=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
