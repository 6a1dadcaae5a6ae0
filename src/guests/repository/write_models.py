"""Guest and RSVP write models. They return DTOs, never ORM models."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.table_names import TableNames
from src.guests.dtos import (
    RSVPDTO,
    EventDTO,
    GuestDTO,
    ImportResultDTO,
    RSVPStatus,
    SeatingTableDTO,
    TableNumberTakenError,
)
from src.guests.repository.orm_models import RSVP, Event, Guest, SeatingTable
from src.realtime.change_feed import ChangeFeed
from src.resources.repository import SqlResourceRepository

logger = logging.getLogger(__name__)


class GuestWriteModel(ABC):
    @abstractmethod
    async def create_guest(self, values: Mapping[str, Any]) -> GuestDTO:
        """Create a guest. A duplicate email is accepted; duplicates are only reported."""
        raise NotImplementedError

    @abstractmethod
    async def update_guest(self, guest_id: UUID, values: Mapping[str, Any]) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> None:
        """Delete the guest record only. Its RSVPs and messages are kept."""
        raise NotImplementedError

    @abstractmethod
    async def import_guests(self, records: Iterable[Mapping[str, Any]]) -> ImportResultDTO:
        raise NotImplementedError


class SqlGuestWriteModel(GuestWriteModel):
    """SQL implementation of guest write operations."""

    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._guests = SqlResourceRepository(
            Guest,
            TableNames.GUESTS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def create_guest(self, values: Mapping[str, Any]) -> GuestDTO:
        return GuestDTO.hydrate(await self._guests.insert(values))

    async def update_guest(self, guest_id: UUID, values: Mapping[str, Any]) -> GuestDTO:
        return GuestDTO.hydrate(await self._guests.update(guest_id, values))

    async def delete_guest(self, guest_id: UUID) -> None:
        await self._guests.delete(guest_id)

    async def import_guests(self, records: Iterable[Mapping[str, Any]]) -> ImportResultDTO:
        """Insert each record on its own. A failing row is logged and counted, never fatal."""
        imported = skipped = failed = 0
        for record in records:
            if not record.get("email"):
                skipped += 1
                continue
            try:
                await self._guests.insert(record)
                imported += 1
            except Exception:
                logger.exception(f"Failed to import guest {record.get('email')}")
                failed += 1

        return ImportResultDTO(imported=imported, skipped=skipped, failed=failed)


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(
        self, guest_id: UUID, event_id: UUID, values: Mapping[str, Any]
    ) -> RSVPDTO:
        """
        Create or replace the guest's response to an event.
        Raises RecordNotFoundError for an unknown guest or event.
        """
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    """Write operations for RSVP. Returns DTOs, never ORM models."""

    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._guests = SqlResourceRepository(
            Guest, TableNames.GUESTS, session_overwrite=session_overwrite
        )
        self._events = SqlResourceRepository(
            Event, TableNames.EVENTS, session_overwrite=session_overwrite
        )
        self._rsvps = SqlResourceRepository(
            RSVP,
            TableNames.RSVPS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def submit_rsvp(
        self, guest_id: UUID, event_id: UUID, values: Mapping[str, Any]
    ) -> RSVPDTO:
        await self._guests.get(guest_id)
        await self._events.get(event_id)

        values = {"status": RSVPStatus.PENDING, **values}
        existing = await self._rsvps.list({"guest_id": guest_id, "event_id": event_id})
        if existing:
            row = await self._rsvps.update(existing[0]["id"], values)
        else:
            row = await self._rsvps.insert({**values, "guest_id": guest_id, "event_id": event_id})

        return RSVPDTO.hydrate(row)


class EventWriteModel(ABC):
    @abstractmethod
    async def create_event(self, values: Mapping[str, Any]) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_event(self, event_id: UUID, values: Mapping[str, Any]) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_id: UUID) -> None:
        """Delete the event together with its RSVPs."""
        raise NotImplementedError


class SqlEventWriteModel(EventWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._events = SqlResourceRepository(
            Event,
            TableNames.EVENTS,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def create_event(self, values: Mapping[str, Any]) -> EventDTO:
        return EventDTO.hydrate(await self._events.insert(values))

    async def update_event(self, event_id: UUID, values: Mapping[str, Any]) -> EventDTO:
        return EventDTO.hydrate(await self._events.update(event_id, values))

    async def delete_event(self, event_id: UUID) -> None:
        await self._events.delete(event_id)


class SeatingWriteModel(ABC):
    @abstractmethod
    async def create_table(self, values: Mapping[str, Any]) -> SeatingTableDTO:
        """Raises TableNumberTakenError when another table has the same number."""
        raise NotImplementedError

    @abstractmethod
    async def update_table(self, table_id: UUID, values: Mapping[str, Any]) -> SeatingTableDTO:
        """Raises TableNumberTakenError when another table has the same number."""
        raise NotImplementedError

    @abstractmethod
    async def delete_table(self, table_id: UUID) -> None:
        raise NotImplementedError


class SqlSeatingWriteModel(SeatingWriteModel):
    def __init__(
        self,
        change_feed: ChangeFeed | None = None,
        session_overwrite: AsyncSession | None = None,
    ) -> None:
        self._tables = SqlResourceRepository(
            SeatingTable,
            TableNames.SEATING_TABLES,
            change_feed=change_feed,
            session_overwrite=session_overwrite,
        )

    async def _check_number_is_free(self, table_number: int, table_id: UUID | None = None) -> None:
        for row in await self._tables.list({"table_number": table_number}):
            if row["id"] != table_id:
                raise TableNumberTakenError(table_number)

    async def create_table(self, values: Mapping[str, Any]) -> SeatingTableDTO:
        await self._check_number_is_free(values["table_number"])
        return SeatingTableDTO.hydrate(await self._tables.insert(values))

    async def update_table(self, table_id: UUID, values: Mapping[str, Any]) -> SeatingTableDTO:
        if "table_number" in values:
            await self._check_number_is_free(values["table_number"], table_id)
        return SeatingTableDTO.hydrate(await self._tables.update(table_id, values))

    async def delete_table(self, table_id: UUID) -> None:
        await self._tables.delete(table_id)
