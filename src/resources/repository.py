"""CRUD over named store resources.

Rows are plain dicts keyed by column name, with the primary key exposed as ``id``.
Each domain hydrates them into its own typed DTOs.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.realtime.change_feed import ChangeAction, ChangeEvent, ChangeFeed, resource_key
from src.resources.dtos import RecordNotFoundError

Row = dict[str, Any]


class ResourceRepository(ABC):
    """Abstract base class for CRUD over one resource."""

    resource: str

    @abstractmethod
    async def list(self, filters: Mapping[str, Any] | None = None) -> list[Row]:
        """List rows matching every filter (exact match), in display order."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, record_id: UUID) -> Row:
        """Get one row. Raises RecordNotFoundError when missing."""
        raise NotImplementedError

    @abstractmethod
    async def insert(self, values: Mapping[str, Any]) -> Row:
        raise NotImplementedError

    @abstractmethod
    async def update(self, record_id: UUID, values: Mapping[str, Any]) -> Row:
        """Update one row. Raises RecordNotFoundError when missing."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, record_id: UUID) -> None:
        """Delete one row. Raises RecordNotFoundError when missing."""
        raise NotImplementedError


class SqlResourceRepository(ResourceRepository):
    """SQL implementation of resource CRUD. Publishes a change event after each committed mutation."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        model,
        resource,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self.model = model
        self.resource = resource_key(resource)
        self.change_feed = change_feed
        self.session_overwrite = session_overwrite
        self._columns = {column.key for column in inspect(model).column_attrs}

    @staticmethod
    def to_row(obj) -> Row:
        row = {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
        row["id"] = row.pop("uuid")
        return row

    def _attribute(self, name: str) -> str:
        attribute = "uuid" if name == "id" else name
        if attribute not in self._columns:
            raise ValueError(f"Unknown field '{name}' for {self.resource}")
        return attribute

    def _attributes(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return {self._attribute(name): value for name, value in values.items()}

    def _order_by(self):
        if "display_order" in self._columns:
            return (self.model.display_order, self.model.created_at)
        return (self.model.created_at,)

    async def _get_or_raise(self, session, record_id: UUID):
        obj = await session.get(self.model, record_id)
        if obj is None:
            raise RecordNotFoundError(self.resource, record_id)
        return obj

    async def _publish(self, action: ChangeAction, record_id: UUID) -> None:
        if self.change_feed:
            await self.change_feed.publish(
                ChangeEvent(resource=self.resource, action=action, record_id=record_id)
            )

    async def list(self, filters: Mapping[str, Any] | None = None) -> list[Row]:
        stmt = select(self.model)
        for name, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, self._attribute(name)) == value)
        stmt = stmt.order_by(*self._order_by())

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [self.to_row(obj) for obj in result.scalars().all()]

    async def get(self, record_id: UUID) -> Row:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            obj = await self._get_or_raise(session, record_id)
            return self.to_row(obj)

    async def insert(self, values: Mapping[str, Any]) -> Row:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            obj = self.model(**self._attributes(values))
            session.add(obj)
            await session.flush()
            await session.refresh(obj)
            row = self.to_row(obj)

        await self._publish(ChangeAction.INSERT, row["id"])
        return row

    async def update(self, record_id: UUID, values: Mapping[str, Any]) -> Row:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            obj = await self._get_or_raise(session, record_id)
            for attribute, value in self._attributes(values).items():
                setattr(obj, attribute, value)
            await session.flush()
            await session.refresh(obj)
            row = self.to_row(obj)

        await self._publish(ChangeAction.UPDATE, record_id)
        return row

    async def delete(self, record_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            obj = await self._get_or_raise(session, record_id)
            await session.delete(obj)
            await session.flush()

        await self._publish(ChangeAction.DELETE, record_id)
