"""Dependency injection factories for API v1."""

from functools import lru_cache

from core.config import settings
from domain.repositories.key_value_store import IKeyValueStore
from domain.services.profile_registry import ProfileRegistry
from domain.services.user_profile_service import UserProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_kv_store import SQLAlchemyKeyValueStore
from infrastructure.storage.kv_repositories import (
    KeyValueProfileRepository,
    KeyValueUserProfileRepository,
)
from infrastructure.storage.memory_store import InMemoryKeyValueStore


@lru_cache
def get_key_value_store() -> IKeyValueStore:
    """Get the storage backend selected by STORAGE_BACKEND."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return SQLAlchemyKeyValueStore(async_session_factory)


@lru_cache
def get_profile_registry() -> ProfileRegistry:
    """Get the process-wide profile registry."""
    return ProfileRegistry(
        KeyValueProfileRepository(get_key_value_store(), settings.vet_profiles_key),
        cleanup_on_load=settings.duplicate_cleanup_on_load,
    )


@lru_cache
def get_user_profile_service() -> UserProfileService:
    """Get User Profile service instance."""
    return UserProfileService(
        KeyValueUserProfileRepository(get_key_value_store(), settings.user_profile_key)
    )
