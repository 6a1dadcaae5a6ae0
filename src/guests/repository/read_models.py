import abc
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.config.table_names import TableNames
from src.guests.dtos import (
    RSVPDTO,
    EventDTO,
    GuestDTO,
    GuestProfileDTO,
    SeatingTableDTO,
)
from src.guests.repository.orm_models import RSVP, Event, Guest, SeatingTable
from src.resources.dtos import RecordNotFoundError
from src.resources.repository import SqlResourceRepository


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_guests(self) -> list[GuestDTO]:
        """All guests, oldest first."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO:
        """Raises RecordNotFoundError when the guest does not exist."""
        raise NotImplementedError


class RSVPReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_rsvps(self) -> list[RSVPDTO]:
        """
        All RSVPs, newest first, each carrying the profile of its guest.
        RSVPs whose guest was deleted keep an empty profile.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def list_events(self) -> list[EventDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_event(self, event_id: UUID) -> EventDTO:
        """Raises RecordNotFoundError when the event does not exist."""
        raise NotImplementedError


class SeatingReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_tables(self) -> list[SeatingTableDTO]:
        raise NotImplementedError


class SqlGuestReadModel(GuestReadModel):
    """SQL implementation of guest read model."""

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self._guests = SqlResourceRepository(
            Guest, TableNames.GUESTS, session_overwrite=session_overwrite
        )

    async def list_guests(self) -> list[GuestDTO]:
        return [GuestDTO.hydrate(row) for row in await self._guests.list()]

    async def get_guest(self, guest_id: UUID) -> GuestDTO:
        return GuestDTO.hydrate(await self._guests.get(guest_id))


class SqlRSVPReadModel(RSVPReadModel):
    """SQL implementation of RSVP read model."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_rsvps(self) -> list[RSVPDTO]:
        stmt = (
            select(RSVP, Guest)
            .outerjoin(Guest, RSVP.guest_id == Guest.uuid)
            .order_by(RSVP.created_at.desc())
        )
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            rsvps = []
            for rsvp, guest in result.all():
                profile = None
                if guest is not None:
                    profile = GuestProfileDTO(
                        email=guest.email,
                        first_name=guest.first_name,
                        last_name=guest.last_name,
                        phone=guest.phone,
                    )
                rsvps.append(RSVPDTO.hydrate(SqlResourceRepository.to_row(rsvp), profile))
            return rsvps

    async def list_events(self) -> list[EventDTO]:
        stmt = select(Event).order_by(Event.event_date)
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [
                EventDTO.hydrate(SqlResourceRepository.to_row(event))
                for event in result.scalars().all()
            ]

    async def get_event(self, event_id: UUID) -> EventDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, event_id)
            if event is None:
                raise RecordNotFoundError(TableNames.EVENTS.value, event_id)
            return EventDTO.hydrate(SqlResourceRepository.to_row(event))


class SqlSeatingReadModel(SeatingReadModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_tables(self) -> list[SeatingTableDTO]:
        stmt = select(SeatingTable).order_by(SeatingTable.table_number)
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [
                SeatingTableDTO.hydrate(SqlResourceRepository.to_row(table))
                for table in result.scalars().all()
            ]
