from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import GuestRole, Relationship, RSVPStatus
from src.models.base import Base, TimeStamp, enum_values


class GuestGroup(Base, TimeStamp):
    __tablename__ = TableNames.GUEST_GROUPS.value

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<GuestGroup {self.name}>"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    # Not unique: duplicate emails are only reported, never rejected
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    role: Mapped[str] = mapped_column(
        Enum(GuestRole, name="guest_role_enum", values_callable=enum_values),
        default=GuestRole.GUEST,
        nullable=False,
    )
    relationship: Mapped[str | None] = mapped_column(
        Enum(Relationship, name="relationship_enum", values_callable=enum_values),
        nullable=True,
    )

    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    plus_one_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    table_preference: Mapped[str | None] = mapped_column(String(255), nullable=True)
    special_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    group_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.GUEST_GROUPS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    invitation_sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    rsvp_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Guest {self.email}>"


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    venue: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # When empty, the deadline falls back to a configurable number of days before the event
    rsvp_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    max_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Event {self.title} on {self.event_date}>"


class RSVP(Base, TimeStamp):
    __tablename__ = TableNames.RSVPS.value
    __table_args__ = (UniqueConstraint("guest_id", "event_id", name="uq_rsvp_guest_event"),)

    # Deleting a guest removes only the guest row; orphaned RSVPs are left to the admin
    guest_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        Enum(RSVPStatus, name="rsvp_status_enum", values_callable=enum_values),
        default=RSVPStatus.PENDING,
        nullable=False,
        index=True,
    )
    guest_count: Mapped[int | None] = mapped_column(Integer, default=1, nullable=True)
    dietary_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    plus_one_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    table_assignment: Mapped[str | None] = mapped_column(String(100), nullable=True)
    accommodation_needed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    transportation_needed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<RSVP {self.guest_id} -> {self.event_id}: {self.status}>"


class SeatingTable(Base, TimeStamp):
    __tablename__ = TableNames.SEATING_TABLES.value

    table_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    assigned_guests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    special_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<SeatingTable {self.table_number} {self.assigned_guests}/{self.capacity}>"
