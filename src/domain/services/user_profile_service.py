"""User profile service layer."""

import asyncio
from collections.abc import Mapping
from dataclasses import fields, replace
from typing import Any

import structlog

from domain.entities.user_profile import UserProfile
from domain.repositories.user_profile_repository import IUserProfileRepository

logger = structlog.get_logger()

_EDITABLE_FIELDS = frozenset(f.name for f in fields(UserProfile)) - {"id"}


class UserProfileService:
    """Reads and updates the owner's profile singleton."""

    def __init__(self, repository: IUserProfileRepository) -> None:
        self._repository = repository
        self._lock = asyncio.Lock()

    async def get_user_profile(self) -> UserProfile:
        """Get the stored user profile, or a blank one if none was saved."""
        profile = await self._repository.get()
        return profile if profile is not None else UserProfile()

    async def update_user_profile(self, updates: Mapping[str, Any]) -> UserProfile:
        """Shallow-merge top-level fields and save the whole profile.

        Nested objects (emergency contact, preferences) are replaced as a
        whole, not merged.
        """
        unknown = set(updates) - _EDITABLE_FIELDS - {"id"}
        if unknown:
            raise TypeError(f"Unknown user profile fields: {', '.join(sorted(unknown))}")

        changes = {k: v for k, v in updates.items() if k != "id"}
        async with self._lock:
            current = await self.get_user_profile()
            updated = replace(current, **changes)
            await self._repository.save(updated)

        logger.info("user_profile_updated", fields=sorted(changes))
        return updated
