"""Transport option read and write models. They return DTOs, never ORM models."""

import abc
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.table_names import TableNames
from src.realtime.change_feed import ChangeFeed
from src.resources.repository import SqlResourceRepository
from src.transport.dtos import TransportOptionDTO
from src.transport.repository.orm_models import TransportOption


class TransportReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_options(self, active_only: bool = False) -> list[TransportOptionDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_option(self, option_id: UUID) -> TransportOptionDTO:
        raise NotImplementedError


class TransportWriteModel(abc.ABC):
    @abc.abstractmethod
    async def create_option(self, values: Mapping[str, Any]) -> TransportOptionDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def update_option(self, option_id: UUID, values: Mapping[str, Any]) -> TransportOptionDTO:
        raise NotImplementedError

    @abc.abstractmethod
    async def delete_option(self, option_id: UUID) -> None:
        raise NotImplementedError


class SqlTransportModel(TransportReadModel, TransportWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._options = SqlResourceRepository(
            TransportOption,
            TableNames.TRANSPORT_OPTIONS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def list_options(self, active_only: bool = False) -> list[TransportOptionDTO]:
        filters = {"is_active": True} if active_only else None
        return [TransportOptionDTO.hydrate(row) for row in await self._options.list(filters)]

    async def get_option(self, option_id: UUID) -> TransportOptionDTO:
        return TransportOptionDTO.hydrate(await self._options.get(option_id))

    async def create_option(self, values: Mapping[str, Any]) -> TransportOptionDTO:
        display_order = len(await self._options.list())
        row = await self._options.insert({**values, "display_order": display_order})
        return TransportOptionDTO.hydrate(row)

    async def update_option(self, option_id: UUID, values: Mapping[str, Any]) -> TransportOptionDTO:
        return TransportOptionDTO.hydrate(await self._options.update(option_id, values))

    async def delete_option(self, option_id: UUID) -> None:
        await self._options.delete(option_id)
