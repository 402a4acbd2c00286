"""Repositories that keep whole aggregates in a single key-value slot."""

from domain.entities.user_profile import UserProfile
from domain.entities.vet_profile import Profile
from domain.repositories.key_value_store import IKeyValueStore
from infrastructure.storage.serializers import (
    decode_profiles,
    decode_user_profile,
    encode_profiles,
    encode_user_profile,
)


class KeyValueProfileRepository:
    """IProfileCollectionRepository storing the collection as one JSON array."""

    def __init__(self, store: IKeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    async def load(self) -> list[Profile]:
        """Load the collection; an empty slot is an empty collection."""
        raw = await self._store.get(self._key)
        if raw is None:
            return []
        return decode_profiles(raw)

    async def save(self, profiles: list[Profile]) -> None:
        """Overwrite the slot with the full collection."""
        await self._store.set(self._key, encode_profiles(profiles))


class KeyValueUserProfileRepository:
    """IUserProfileRepository storing the singleton as one JSON object."""

    def __init__(self, store: IKeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    async def get(self) -> UserProfile | None:
        raw = await self._store.get(self._key)
        if raw is None:
            return None
        return decode_user_profile(raw)

    async def save(self, profile: UserProfile) -> None:
        await self._store.set(self._key, encode_user_profile(profile))
