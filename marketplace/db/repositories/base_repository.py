"""
Base repository - generic async data access shared by users and items.
Repositories flush but never commit; the request-scoped session owns the transaction.
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses add model-specific queries."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        """Fetch one row by primary key, reloading it if already in the session."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        return result.unique().scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Insert and flush so the id and server defaults are available."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def save(self, entity: ModelType) -> ModelType:
        """Flush pending changes on an already-persistent entity."""
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()
