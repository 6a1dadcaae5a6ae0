from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

import pytest

from src.communications.dtos import CommunicationDTO, CommunicationStatus
from src.communications.repository.write_models import CommunicationWriteModel
from src.email_service.base import EmailServiceBase
from src.guests.dtos import (
    RSVPDTO,
    EventDTO,
    GuestDTO,
    GuestProfileDTO,
    ImportResultDTO,
    Relationship,
    RSVPStatus,
    SeatingTableDTO,
)
from src.guests.repository.read_models import GuestReadModel, RSVPReadModel, SeatingReadModel
from src.guests.repository.write_models import GuestWriteModel, RSVPWriteModel
from src.resources.dtos import RecordNotFoundError, RemoteCallError


class InMemoryGuestModel(GuestReadModel, GuestWriteModel):
    def __init__(self, guests: list[GuestDTO] | None = None) -> None:
        self.guests = {g.id: g for g in guests or []}
        self.imported: list[Mapping[str, Any]] = []

    async def list_guests(self) -> list[GuestDTO]:
        return list(self.guests.values())

    async def get_guest(self, guest_id: UUID) -> GuestDTO:
        if guest_id not in self.guests:
            raise RecordNotFoundError("guests", guest_id)
        return self.guests[guest_id]

    async def create_guest(self, values: Mapping[str, Any]) -> GuestDTO:
        guest = GuestDTO.hydrate({**values, "id": uuid4()})
        self.guests[guest.id] = guest
        return guest

    async def update_guest(self, guest_id: UUID, values: Mapping[str, Any]) -> GuestDTO:
        guest = replace(await self.get_guest(guest_id), **values)
        self.guests[guest_id] = guest
        return guest

    async def delete_guest(self, guest_id: UUID) -> None:
        await self.get_guest(guest_id)
        del self.guests[guest_id]

    async def import_guests(self, records: Iterable[Mapping[str, Any]]) -> ImportResultDTO:
        imported = skipped = 0
        for record in records:
            if not record.get("email"):
                skipped += 1
                continue
            self.imported.append(record)
            await self.create_guest(record)
            imported += 1
        return ImportResultDTO(imported=imported, skipped=skipped)


class InMemoryRSVPModel(RSVPReadModel, RSVPWriteModel):
    def __init__(
        self,
        rsvps: list[RSVPDTO] | None = None,
        events: list[EventDTO] | None = None,
    ) -> None:
        self.rsvps = list(rsvps or [])
        self.events = {e.id: e for e in events or []}
        self.list_calls = 0
        self.fail = False

    async def list_rsvps(self) -> list[RSVPDTO]:
        self.list_calls += 1
        if self.fail:
            raise RemoteCallError("store unavailable")
        return list(self.rsvps)

    async def list_events(self) -> list[EventDTO]:
        return list(self.events.values())

    async def get_event(self, event_id: UUID) -> EventDTO:
        if event_id not in self.events:
            raise RecordNotFoundError("events", event_id)
        return self.events[event_id]

    async def submit_rsvp(
        self, guest_id: UUID, event_id: UUID, values: Mapping[str, Any]
    ) -> RSVPDTO:
        await self.get_event(event_id)
        self.rsvps = [
            r for r in self.rsvps if not (r.guest_id == guest_id and r.event_id == event_id)
        ]
        rsvp = RSVPDTO.hydrate({**values, "id": uuid4(), "guest_id": guest_id, "event_id": event_id})
        self.rsvps.append(rsvp)
        return rsvp


class InMemorySeatingModel(SeatingReadModel):
    def __init__(self, tables: list[SeatingTableDTO] | None = None) -> None:
        self.tables = list(tables or [])

    async def list_tables(self) -> list[SeatingTableDTO]:
        return list(self.tables)


class RecordingEmailService(EmailServiceBase):
    """Keeps every email instead of sending it. Addresses in failing_addresses raise."""

    def __init__(self, failing_addresses: Iterable[str] = ()) -> None:
        self.failing_addresses = set(failing_addresses)
        self.invitations: list[dict[str, str]] = []
        self.reminders: list[dict[str, str]] = []

    async def send_invitation(self, **kwargs) -> None:
        if kwargs["to_address"] in self.failing_addresses:
            raise RemoteCallError(f"Failed to send email to {kwargs['to_address']}")
        self.invitations.append(kwargs)

    async def send_rsvp_reminder(self, **kwargs) -> None:
        if kwargs["to_address"] in self.failing_addresses:
            raise RemoteCallError(f"Failed to send email to {kwargs['to_address']}")
        self.reminders.append(kwargs)


class InMemoryCommunicationLog(CommunicationWriteModel):
    def __init__(self) -> None:
        self.communications: dict[UUID, CommunicationDTO] = {}

    @property
    def records(self) -> list[CommunicationDTO]:
        return list(self.communications.values())

    async def record(self, values: Mapping[str, Any]) -> CommunicationDTO:
        communication = CommunicationDTO.hydrate({**values, "id": uuid4()})
        self.communications[communication.id] = communication
        return communication

    async def mark_read(self, communication_id: UUID) -> CommunicationDTO:
        communication = replace(
            self.communications[communication_id], status=CommunicationStatus.READ
        )
        self.communications[communication_id] = communication
        return communication

    async def delete(self, communication_id: UUID) -> None:
        self.communications.pop(communication_id)


@pytest.fixture
def ceremony():
    return EventDTO(
        id=uuid4(),
        title="Ceremony",
        event_date=datetime(2026, 9, 12, 15, 0, tzinfo=timezone.utc),
        venue="Old Chapel",
        address="1 Church Lane",
        max_capacity=20,
    )


@pytest.fixture
def guest_model():
    return InMemoryGuestModel(
        [
            GuestDTO(
                id=uuid4(),
                email="ann@example.com",
                first_name="Ann",
                last_name="Lee",
                relationship=Relationship.FAMILY,
            ),
            GuestDTO(
                id=uuid4(),
                email="ben@example.com",
                first_name="Ben",
                last_name="Cole",
                relationship=Relationship.FRIEND,
                plus_one_name="Bea",
                invitation_sent=True,
            ),
            GuestDTO(
                id=uuid4(),
                email="ANN@example.com",
                first_name="Annie",
                relationship=Relationship.COLLEAGUE,
            ),
        ]
    )


@pytest.fixture
def rsvp_model(ceremony):
    return InMemoryRSVPModel(
        [
            RSVPDTO(
                id=uuid4(),
                guest_id=uuid4(),
                event_id=ceremony.id,
                status=RSVPStatus.ATTENDING,
                guest_count=2,
                profile=GuestProfileDTO(email="ann@example.com", first_name="Ann", last_name="Lee"),
            ),
            RSVPDTO(
                id=uuid4(),
                guest_id=uuid4(),
                event_id=ceremony.id,
                status=RSVPStatus.PENDING,
                profile=GuestProfileDTO(email="ben@example.com", first_name="Ben"),
            ),
            RSVPDTO(
                id=uuid4(),
                guest_id=uuid4(),
                event_id=ceremony.id,
                status=RSVPStatus.PENDING,
                profile=None,
            ),
        ],
        [ceremony],
    )


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def communication_log():
    return InMemoryCommunicationLog()


@pytest.fixture
def seating_model():
    return InMemorySeatingModel(
        [
            SeatingTableDTO(id=uuid4(), table_number=1, capacity=8, assigned_guests=8),
            SeatingTableDTO(
                id=uuid4(), table_number=2, capacity=10, assigned_guests=9, name="Family"
            ),
            SeatingTableDTO(id=uuid4(), table_number=3, capacity=10, assigned_guests=2),
        ]
    )
