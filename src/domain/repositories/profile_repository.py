"""Vet profile collection repository protocol."""

from typing import Protocol

from domain.entities.vet_profile import Profile


class IProfileCollectionRepository(Protocol):
    """Repository interface for the vet/clinic profile collection.

    The collection is the unit of persistence: it is always loaded and saved
    in full.
    """

    async def load(self) -> list[Profile]:
        """Load every stored profile, in stored order."""
        ...

    async def save(self, profiles: list[Profile]) -> None:
        """Replace the stored collection with the given profiles."""
        ...
