from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.communications.dtos import CommunicationDTO, CommunicationStatus
from src.communications.repository.orm_models import GuestCommunication
from src.config.table_names import TableNames
from src.models.base import utcnow
from src.realtime.change_feed import ChangeFeed
from src.resources.repository import SqlResourceRepository


class CommunicationWriteModel(ABC):
    @abstractmethod
    async def record(self, values: Mapping[str, Any]) -> CommunicationDTO:
        """Store a communication as given."""
        raise NotImplementedError

    @abstractmethod
    async def mark_read(self, communication_id: UUID) -> CommunicationDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, communication_id: UUID) -> None:
        raise NotImplementedError


class SqlCommunicationWriteModel(CommunicationWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._communications = SqlResourceRepository(
            GuestCommunication,
            TableNames.GUEST_COMMUNICATIONS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def record(self, values: Mapping[str, Any]) -> CommunicationDTO:
        return CommunicationDTO.hydrate(await self._communications.insert(values))

    async def mark_read(self, communication_id: UUID) -> CommunicationDTO:
        row = await self._communications.update(
            communication_id, {"status": CommunicationStatus.READ, "read_at": utcnow()}
        )
        return CommunicationDTO.hydrate(row)

    async def delete(self, communication_id: UUID) -> None:
        await self._communications.delete(communication_id)
