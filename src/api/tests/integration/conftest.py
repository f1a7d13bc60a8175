"""Integration test fixtures for PostgreSQL and the Firestore emulator.

These fixtures require a running PostgreSQL instance and, for document
tests, the Firestore emulator (FIRESTORE_EMULATOR_HOST). Run with
``pytest -m integration``.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import identity.infrastructure.models  # noqa: F401
import talk.infrastructure.models  # noqa: F401
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings
from shared_kernel.document_store.firestore import FirestoreDocumentStore


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        TALKROOM_DB_HOST, TALKROOM_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("TALKROOM_DB_HOST", "localhost"),
        port=int(os.getenv("TALKROOM_DB_PORT", "5432")),
        database=os.getenv("TALKROOM_DB_DATABASE", "talkroom_test"),
        username=os.getenv("TALKROOM_DB_USERNAME", "talkroom"),
        password=SecretStr(os.getenv("TALKROOM_DB_PASSWORD", "talkroom_dev_password")),
        pool_min_connections=2,
        pool_max_connections=10,
    )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine over freshly created tables."""
    engine = create_engine(integration_db_settings)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as connection:
        await connection.execute(
            text("TRUNCATE talk_rooms, line_users, primary_users CASCADE")
        )
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def document_store() -> FirestoreDocumentStore:
    """Provide a Firestore store pointed at the emulator."""
    if not os.getenv("FIRESTORE_EMULATOR_HOST"):
        pytest.skip("FIRESTORE_EMULATOR_HOST is not set")
    return FirestoreDocumentStore(project_id="talkroom-test")
