"""
Footprints Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   In-memory SQLite (aiosqlite) stands in for the trip table; a real
       boto3 client with dummy credentials signs URLs (signing is offline).

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        fresh in-memory database with the trips table
    ├── db_session:       session on that database, for service tests
    ├── mock_db_session:  AsyncMock session for forcing database failures
    ├── s3_client:        boto3 S3 client, dummy credentials
    ├── storage:          StorageService on s3_client, bucket "test-bucket"
    └── test_client:      HTTPX AsyncClient with both dependencies overridden
"""

import os

# Override settings for testing BEFORE any footprints imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PHOTOS_BUCKET"] = "test-bucket"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import boto3
import pytest
import pytest_asyncio
from botocore.client import Config
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from footprints.database import Base, get_db_session
from footprints.models import Trip  # noqa: F401
from footprints.services.storage_service import StorageService, get_storage_service

TEST_BUCKET = "test-bucket"


# ══════════════════════════════════════════════════════════════════════════
# Trip Table
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine with the schema created from the ORM metadata.

    StaticPool keeps one connection, so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    AsyncMock session for tests that need a database call to fail.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.merge = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Object Store
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def s3_client():
    """Real boto3 client; generate_presigned_url needs no network access."""
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )


@pytest.fixture
def storage(s3_client) -> StorageService:
    return StorageService(bucket_name=TEST_BUCKET, client=s3_client)


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory, storage):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session and get_storage_service are overridden with the test
    database and the test StorageService.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from footprints.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_storage_service] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def trip_payload():
    """Body of a typical POST /Trips."""
    return {
        "UserID": "u1",
        "TripID": "t1",
        "Title": "Lisbon",
        "Location": "Lisbon, Portugal",
        "Description": "Tiles and tram 28",
        "ImageUrls": ["trips/u1/t1/tram.jpg", "trips/u1/t1/tiles.HEIC"],
        "StartDate": "2024-05-01",
        "EndDate": "2024-05-06",
        "Visibility": "private",
        "Locations": [{"id": "p1", "lat": 38.7223, "lng": -9.1393, "label": "Alfama"}],
    }
