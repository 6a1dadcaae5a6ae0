import contextlib

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# every ORM module, so the metadata knows all tables
import src.accommodation.repository.orm_models  # noqa: F401
import src.communications.repository.orm_models  # noqa: F401
import src.faq.repository.orm_models  # noqa: F401
import src.feature_flags.repository.orm_models  # noqa: F401
import src.guests.repository.orm_models  # noqa: F401
import src.social.repository.orm_models  # noqa: F401
import src.transport.repository.orm_models  # noqa: F401
from src.main import app
from src.models.base import BaseModel
from src.resources.dtos import RemoteCallError
from src.storage.file_store import FileStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_session():
    """A session on a fresh in-memory database holding every table."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def client_factory():
    """Build a test client with the given dependency overrides."""

    @contextlib.asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac


class InMemoryFileStore(FileStore):
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.fail = False

    async def upload(self, bucket, path, data, content_type="application/octet-stream") -> str:
        if self.fail:
            raise RemoteCallError("storage unavailable")
        key = f"{bucket}/{path}"
        self.files[key] = data
        self.content_types[key] = content_type
        return f"https://files.test/{key}"


@pytest.fixture
def file_store():
    return InMemoryFileStore()
