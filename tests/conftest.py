"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Disable rate limiting and keep storage in memory for tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.profile_registry import ProfileRegistry
from domain.services.user_profile_service import UserProfileService
from infrastructure.storage.kv_repositories import (
    KeyValueProfileRepository,
    KeyValueUserProfileRepository,
)
from infrastructure.storage.memory_store import InMemoryKeyValueStore

VET_PROFILES_KEY = "vetProfiles"
USER_PROFILE_KEY = "userProfile"


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """A fresh, empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def registry(store: InMemoryKeyValueStore) -> ProfileRegistry:
    """A profile registry persisting into the in-memory store."""
    return ProfileRegistry(KeyValueProfileRepository(store, VET_PROFILES_KEY))


@pytest.fixture
def user_profile_service(store: InMemoryKeyValueStore) -> UserProfileService:
    """A user profile service persisting into the in-memory store."""
    return UserProfileService(KeyValueUserProfileRepository(store, USER_PROFILE_KEY))


@pytest.fixture
async def client(
    registry: ProfileRegistry,
    user_profile_service: UserProfileService,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async test client wired to in-memory services.

    Each test gets its own registry and store, so tests never see each
    other's profiles.
    """
    from api.v1.dependencies import get_profile_registry, get_user_profile_service
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_profile_registry] = lambda: registry
    app.dependency_overrides[get_user_profile_service] = lambda: user_profile_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
