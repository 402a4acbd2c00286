"""Unit tests for the SQLAlchemy key-value store."""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from domain.entities.vet_profile import ProfileDraft
from domain.services.profile_registry import ProfileRegistry
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_kv_store import SQLAlchemyKeyValueStore
from infrastructure.storage.kv_repositories import KeyValueProfileRepository

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create a session factory over a fresh in-memory database."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def sql_store(session_factory: async_sessionmaker[AsyncSession]) -> SQLAlchemyKeyValueStore:
    return SQLAlchemyKeyValueStore(session_factory)


class TestSQLAlchemyKeyValueStore:
    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, sql_store: SQLAlchemyKeyValueStore):
        assert await sql_store.get("absent") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, sql_store: SQLAlchemyKeyValueStore):
        await sql_store.set("slot", "[]")

        assert await sql_store.get("slot") == "[]"

    @pytest.mark.asyncio
    async def test_set_overwrites(self, sql_store: SQLAlchemyKeyValueStore):
        await sql_store.set("slot", "first")
        await sql_store.set("slot", "second")

        assert await sql_store.get("slot") == "second"

    @pytest.mark.asyncio
    async def test_registry_state_survives_restart(self, sql_store: SQLAlchemyKeyValueStore):
        first = ProfileRegistry(KeyValueProfileRepository(sql_store, "vetProfiles"))
        clinic = await first.add_profile(ProfileDraft(is_clinic=True, clinic_name="Valley Vet"))

        second = ProfileRegistry(KeyValueProfileRepository(sql_store, "vetProfiles"))

        assert [p.id for p in await second.list_profiles()] == [clinic.id]
        assert await second.is_duplicate(ProfileDraft(is_clinic=True, clinic_name="valley vet"))
