"""Guest form values to store records and back."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from src.common.forms import (
    FormValidationError,
    blank_to_none,
    parse_optional_uuid,
    require,
)
from src.guests.dtos import GuestDTO, GuestRole, Relationship

IMPORT_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "dietary_restrictions",
    "plus_one_name",
    "relationship",
    "table_preference",
    "special_notes",
)


class GuestForm(BaseModel):
    """Flat guest form as submitted by the admin dashboard."""

    email: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    role: str = GuestRole.GUEST.value
    relationship: str = Relationship.FRIEND.value
    dietary_restrictions: str = ""
    plus_one_name: str = ""
    table_preference: str = ""
    special_notes: str = ""
    group_id: str = ""

    def to_record(self) -> dict[str, Any]:
        require("email", self.email)
        try:
            role = GuestRole(self.role)
        except ValueError as e:
            raise FormValidationError("role", f"Unknown role '{self.role}'") from e
        try:
            relationship = Relationship(self.relationship) if self.relationship else None
        except ValueError as e:
            raise FormValidationError(
                "relationship", f"Unknown relationship '{self.relationship}'"
            ) from e

        return {
            "email": self.email.strip(),
            "first_name": blank_to_none(self.first_name),
            "last_name": blank_to_none(self.last_name),
            "phone": blank_to_none(self.phone),
            "role": role,
            "relationship": relationship,
            "dietary_restrictions": blank_to_none(self.dietary_restrictions),
            "plus_one_name": blank_to_none(self.plus_one_name),
            "table_preference": blank_to_none(self.table_preference),
            "special_notes": blank_to_none(self.special_notes),
            "group_id": parse_optional_uuid("group_id", self.group_id),
        }


def guest_to_form(guest: GuestDTO) -> GuestForm:
    return GuestForm(
        email=guest.email or "",
        first_name=guest.first_name or "",
        last_name=guest.last_name or "",
        phone=guest.phone or "",
        role=guest.role.value,
        relationship=guest.relationship.value if guest.relationship else "",
        dietary_restrictions=guest.dietary_restrictions or "",
        plus_one_name=guest.plus_one_name or "",
        table_preference=guest.table_preference or "",
        special_notes=guest.special_notes or "",
        group_id=str(guest.group_id) if guest.group_id else "",
    )


def parse_import_line(line: str) -> dict[str, Any]:
    """
    Map one "First,Last,Email,Phone,Dietary,PlusOne,Relationship,TablePref,Notes"
    line to a guest record. Missing trailing columns are empty; the email may be
    empty, in which case the caller skips the row.
    """
    values = [value.strip() for value in line.split(",")]
    values += [""] * (len(IMPORT_COLUMNS) - len(values))
    raw = dict(zip(IMPORT_COLUMNS, values))

    record: dict[str, Any] = {name: blank_to_none(value) for name, value in raw.items()}
    try:
        record["relationship"] = Relationship(raw["relationship"] or Relationship.FRIEND)
    except ValueError:
        record["relationship"] = Relationship.OTHER
    return record


def parse_import(text: str) -> list[dict[str, Any]]:
    return [parse_import_line(line) for line in text.strip().splitlines() if line.strip()]


def parse_datetime(field: str, text: str) -> datetime | None:
    """ISO date or date-time text. A time without an offset is taken as UTC."""
    if not text or not text.strip():
        return None
    try:
        value = datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise FormValidationError(field, "Please enter a valid date and time") from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_count(field: str, text: str, message: str) -> int | None:
    """Whole, non-negative number. Empty text means no value."""
    if not text or not text.strip():
        return None
    try:
        value = int(text)
    except ValueError as e:
        raise FormValidationError(field, message) from e
    if value < 0:
        raise FormValidationError(field, message)
    return value


class EventForm(BaseModel):
    title: str = ""
    # ISO 8601, e.g. "2026-09-12T15:00"
    event_date: str = ""
    venue: str = ""
    address: str = ""
    # empty falls back to a number of days before the event
    rsvp_deadline: str = ""
    # empty means unlimited
    max_capacity: str = ""

    def to_record(self) -> dict[str, Any]:
        require("title", self.title, "Title is required")
        event_date = parse_datetime("event_date", self.event_date)
        if event_date is None:
            raise FormValidationError("event_date", "Event date is required")
        rsvp_deadline = parse_datetime("rsvp_deadline", self.rsvp_deadline)
        if rsvp_deadline and rsvp_deadline > event_date:
            raise FormValidationError("rsvp_deadline", "The RSVP deadline must be before the event")

        return {
            "title": self.title.strip(),
            "event_date": event_date,
            "venue": blank_to_none(self.venue),
            "address": blank_to_none(self.address),
            "rsvp_deadline": rsvp_deadline,
            "max_capacity": parse_count(
                "max_capacity", self.max_capacity, "Capacity must be a whole number"
            ),
        }


class SeatingTableForm(BaseModel):
    table_number: int
    name: str = ""
    capacity: int
    assigned_guests: int = 0
    special_requirements: str = ""

    def to_record(self) -> dict[str, Any]:
        if self.table_number < 1:
            raise FormValidationError("table_number", "Table number must be positive")
        if self.capacity < 1:
            raise FormValidationError("capacity", "Capacity must be at least 1")
        if not 0 <= self.assigned_guests <= self.capacity:
            raise FormValidationError(
                "assigned_guests", "Assigned guests must be between 0 and the table capacity"
            )

        return {
            "table_number": self.table_number,
            "name": blank_to_none(self.name),
            "capacity": self.capacity,
            "assigned_guests": self.assigned_guests,
            "special_requirements": blank_to_none(self.special_requirements),
        }
