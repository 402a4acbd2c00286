"""SQLAlchemy implementation of the key-value store."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import StorageSlotModel


class SQLAlchemyKeyValueStore:
    """IKeyValueStore persisting each slot as a row of ``storage_slots``.

    Every call runs in its own short transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        """Get the raw value stored under a key."""
        async with self._session_factory() as session:
            stmt = select(StorageSlotModel.value).where(StorageSlotModel.key == key)
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        """Insert or replace the value stored under a key."""
        async with self._session_factory() as session:
            model = await session.get(StorageSlotModel, key)
            if model is None:
                session.add(StorageSlotModel(key=key, value=value))
            else:
                model.value = value
            await session.commit()
