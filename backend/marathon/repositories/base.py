"""Shared repository plumbing."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marathon.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Lookup, counting and write helpers for one mapped table.

    There is no delete: registrations, races and users are never removed
    while anything references them.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def get(self, id: int) -> ModelType | None:
        """Get a row by primary key."""
        return await self.session.get(self.model, id)

    async def count(self, filters: dict[str, Any] | None = None) -> int:
        """Count rows matching equality filters on mapped columns."""
        query = select(func.count()).select_from(self.model)
        for column, value in (filters or {}).items():
            query = query.where(getattr(self.model, column) == value)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def create(self, values: dict[str, Any]) -> ModelType:
        """Insert a row and return it with server defaults loaded."""
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: int, values: dict[str, Any]) -> ModelType | None:
        """Overwrite columns of an existing row, None values included."""
        instance = await self.get(id)
        if instance is None:
            return None

        for column, value in values.items():
            setattr(instance, column, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance
