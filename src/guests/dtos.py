from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class ActionInProgressError(Exception):
    """Raised when an action is triggered again while its request is still in flight."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"'{action}' is already in progress")


class TableNumberTakenError(Exception):
    def __init__(self, table_number: int) -> None:
        self.table_number = table_number
        super().__init__(f"Table {table_number} already exists")


class GuestRole(str, Enum):
    GUEST = "guest"
    ADMIN = "admin"
    COUPLE = "couple"


class Relationship(str, Enum):
    FAMILY = "family"
    FRIEND = "friend"
    COLLEAGUE = "colleague"
    OTHER = "other"


class RSVPStatus(str, Enum):
    ATTENDING = "attending"
    DECLINED = "declined"
    PENDING = "pending"
    MAYBE = "maybe"


class TableCapacityStatus(str, Enum):
    AVAILABLE = "available"
    ALMOST_FULL = "almost_full"
    FULL = "full"


@dataclass(frozen=True)
class GuestProfileDTO:
    """Guest fields denormalized onto an RSVP."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}"


@dataclass(frozen=True)
class GuestDTO:
    """DTO for guest data."""

    id: UUID
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    role: GuestRole = GuestRole.GUEST
    relationship: Relationship | None = None
    dietary_restrictions: str | None = None
    plus_one_name: str | None = None
    table_preference: str | None = None
    special_notes: str | None = None
    group_id: UUID | None = None
    invitation_sent: bool = False
    rsvp_deadline: datetime | None = None
    created_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}"

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "GuestDTO":
        """Build a GuestDTO from a store row, applying every optional-field default once."""
        relationship = row.get("relationship")
        return cls(
            id=row["id"],
            email=row.get("email"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            phone=row.get("phone"),
            role=GuestRole(row.get("role") or GuestRole.GUEST),
            relationship=Relationship(relationship) if relationship else None,
            dietary_restrictions=row.get("dietary_restrictions"),
            plus_one_name=row.get("plus_one_name"),
            table_preference=row.get("table_preference"),
            special_notes=row.get("special_notes"),
            group_id=row.get("group_id"),
            invitation_sent=bool(row.get("invitation_sent")),
            rsvp_deadline=row.get("rsvp_deadline"),
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class EventDTO:
    """DTO for a schedulable occasion within the wedding."""

    id: UUID
    title: str
    event_date: datetime
    venue: str | None = None
    address: str | None = None
    rsvp_deadline: datetime | None = None
    max_capacity: int | None = None

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "EventDTO":
        return cls(
            id=row["id"],
            title=row["title"],
            event_date=row["event_date"],
            venue=row.get("venue"),
            address=row.get("address"),
            rsvp_deadline=row.get("rsvp_deadline"),
            max_capacity=row.get("max_capacity"),
        )


@dataclass(frozen=True)
class RSVPDTO:
    """DTO for one guest's response to one event, joined with the guest profile."""

    id: UUID
    guest_id: UUID | None
    event_id: UUID
    status: RSVPStatus = RSVPStatus.PENDING
    guest_count: int | None = 1
    dietary_restrictions: str | None = None
    message: str | None = None
    plus_one_name: str | None = None
    table_assignment: str | None = None
    accommodation_needed: bool = False
    transportation_needed: bool = False
    profile: GuestProfileDTO | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def hydrate(
        cls, row: Mapping[str, Any], profile: GuestProfileDTO | None = None
    ) -> "RSVPDTO":
        return cls(
            id=row["id"],
            guest_id=row["guest_id"],
            event_id=row["event_id"],
            status=RSVPStatus(row.get("status") or RSVPStatus.PENDING),
            guest_count=row.get("guest_count"),
            dietary_restrictions=row.get("dietary_restrictions"),
            message=row.get("message"),
            plus_one_name=row.get("plus_one_name"),
            table_assignment=row.get("table_assignment"),
            accommodation_needed=bool(row.get("accommodation_needed")),
            transportation_needed=bool(row.get("transportation_needed")),
            profile=profile,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )


@dataclass(frozen=True)
class RSVPStatsDTO:
    """Statistics snapshot derived from the current RSVP and event lists. Never persisted."""

    total: int = 0
    attending: int = 0
    declined: int = 0
    pending: int = 0
    maybe: int = 0
    total_guests: int = 0
    registered_users: int = 0
    unregistered_guests: int = 0
    dietary_restrictions: int = 0
    plus_ones: int = 0
    need_accommodation: int = 0
    need_transportation: int = 0
    response_rate: int = 0
    capacity_used: int = 0


@dataclass(frozen=True)
class GuestStatsDTO:
    total: int = 0
    with_plus_one: int = 0
    dietary_restrictions: int = 0
    invitations_sent: int = 0
    pending_rsvp: int = 0
    by_relationship: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class DuplicatePairDTO:
    """Two guests sharing an email. Advisory only."""

    original: GuestDTO
    duplicate: GuestDTO


@dataclass(frozen=True)
class SeatingTableDTO:
    id: UUID
    table_number: int
    capacity: int
    assigned_guests: int = 0
    name: str | None = None
    special_requirements: str | None = None

    @classmethod
    def hydrate(cls, row: Mapping[str, Any]) -> "SeatingTableDTO":
        return cls(
            id=row["id"],
            table_number=row["table_number"],
            capacity=row.get("capacity") or 0,
            assigned_guests=row.get("assigned_guests") or 0,
            name=row.get("name"),
            special_requirements=row.get("special_requirements"),
        )


@dataclass(frozen=True)
class SeatingSummaryDTO:
    total_seated: int = 0
    total_capacity: int = 0


@dataclass(frozen=True)
class ReminderResultDTO:
    """Outcome of sending RSVP reminders to every pending guest."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class ImportResultDTO:
    """Outcome of a bulk guest import. Rows without an email are skipped; failing rows are counted."""

    imported: int = 0
    skipped: int = 0
    failed: int = 0
