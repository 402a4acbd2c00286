"""Key-value storage protocol."""

from typing import Protocol


class IKeyValueStore(Protocol):
    """Named string slots, each read and written as a whole."""

    async def get(self, key: str) -> str | None:
        """Get the raw value stored under a key, or None if the slot is empty."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Replace the value stored under a key."""
        ...
