import os

# settings are read on import, point them at a throwaway database first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import httpx
from httpx import ASGITransport
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from app.models import Base
from app.services.photo_service import PhotoService, StepPhotoService
from tests.testing_config import testing_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        testing_settings.ASYNC_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()

@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    async with async_sessionmaker(bind=db_engine, expire_on_commit=False)() as session:
        yield session

@pytest.fixture
def photos_root(tmp_path):
    return tmp_path / testing_settings.PHOTOS_DIRECTORY

@pytest.fixture
def photo_service(photos_root) -> PhotoService:
    return PhotoService(str(photos_root))

@pytest.fixture
def step_photo_service(photos_root) -> StepPhotoService:
    return StepPhotoService(str(photos_root))

@pytest.fixture
async def async_client(db_engine, photo_service, step_photo_service):
    from app.main import app
    from app.db.session import get_db
    from app.services.photo_service import get_photo_service, get_step_photo_service

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with async_sessionmaker(bind=db_engine, expire_on_commit=False)() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_photo_service] = lambda: photo_service
    app.dependency_overrides[get_step_photo_service] = lambda: step_photo_service

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
