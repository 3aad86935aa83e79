"""Base repository: the data-access interface shared by every model.

Each repository wraps one ``AsyncSession``. Writes are flushed, never
committed; the calling service decides where a unit of work ends.
"""
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from album_server.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Base repository class.

    Subclasses only set ``model``:

        class AlbumRepository(Repository[Album]):
            model = Album

    Lookups return ``None`` (or an empty list) for "not found"; deletes
    return the number of affected rows. Driver errors propagate.
    """

    model: Type[ModelT]

    def __init__(self, db: AsyncSession):
        """Initialize repository with a database session.

        Args:
            db: Async session owned by the current request
        """
        self.db = db

    async def find_all(self) -> List[ModelT]:
        """All records ordered by primary key."""
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        """Primary-key lookup.

        Args:
            entity_id: Record ID

        Returns:
            Record if found, None otherwise
        """
        return await self.db.get(self.model, entity_id)

    async def find_where(self, **filters: Any) -> List[ModelT]:
        """Records matching every ``column=value`` equality filter."""
        result = await self.db.execute(
            select(self.model).filter_by(**filters).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def create(self, entity: ModelT) -> ModelT:
        """Insert a new record and load its generated id."""
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def save(self, entity: ModelT) -> ModelT:
        """Persist every column of an existing record."""
        entity = await self.db.merge(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> int:
        """Delete by primary key.

        Returns:
            Number of rows deleted (0 when the record did not exist)
        """
        result = await self.db.execute(
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def delete_where(self, **filters: Any) -> int:
        """Delete every record matching the equality filters.

        Returns:
            Number of rows deleted
        """
        result = await self.db.execute(
            delete(self.model)
            .filter_by(**filters)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
