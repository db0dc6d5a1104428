import os

# must be set before the settings are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./wedding_seating.db")
os.environ.setdefault("RESEND_API_KEY", "")

from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.config.database import engine  # noqa: E402
from src.guests.repository import orm_models  # noqa: E402, F401
from src.main import app  # noqa: E402
from src.models.base import BaseModel  # noqa: E402


@pytest.fixture(autouse=True)
async def database():
    """Fresh schema for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
        await conn.run_sync(BaseModel.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def client_factory():
    @asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as client:
        yield client
