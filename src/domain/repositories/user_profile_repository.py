"""User profile repository protocol."""

from typing import Protocol

from domain.entities.user_profile import UserProfile


class IUserProfileRepository(Protocol):
    """Repository interface for the user profile singleton."""

    async def get(self) -> UserProfile | None:
        """Get the stored user profile, or None if nothing was saved yet."""
        ...

    async def save(self, profile: UserProfile) -> None:
        """Replace the stored user profile."""
        ...
