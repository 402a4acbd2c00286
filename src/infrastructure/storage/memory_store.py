"""In-process key-value store."""


class InMemoryKeyValueStore:
    """IKeyValueStore backed by a dict. Contents live as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._slots.get(key)

    async def set(self, key: str, value: str) -> None:
        self._slots[key] = value
