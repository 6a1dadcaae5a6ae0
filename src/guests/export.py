import csv
import io
from collections.abc import Iterable

from src.guests.dtos import GuestDTO

GUEST_EXPORT_HEADER = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Role",
    "Dietary Restrictions",
    "Plus One",
    "Relationship",
    "Table Preference",
    "Special Notes",
    "Join Date",
]


def export_guests_csv(guests: Iterable[GuestDTO]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(GUEST_EXPORT_HEADER)
    for guest in guests:
        writer.writerow(
            [
                guest.first_name or "",
                guest.last_name or "",
                guest.email or "",
                guest.phone or "",
                guest.role.value,
                guest.dietary_restrictions or "",
                guest.plus_one_name or "",
                guest.relationship.value if guest.relationship else "",
                guest.table_preference or "",
                guest.special_notes or "",
                guest.created_at.date().isoformat() if guest.created_at else "",
            ]
        )
    return buffer.getvalue()
