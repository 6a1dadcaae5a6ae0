"""Statistics derived from already-fetched guest, RSVP and seating lists.

Every function here is pure and total: empty lists and absent optional fields
produce zeros, never an exception.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from src.guests.dtos import (
    RSVPDTO,
    DuplicatePairDTO,
    EventDTO,
    GuestDTO,
    GuestStatsDTO,
    Relationship,
    RSVPStatsDTO,
    RSVPStatus,
    SeatingSummaryDTO,
    SeatingTableDTO,
    TableCapacityStatus,
)


def round_half_up(value: float) -> int:
    """Round .5 upwards; round() would give 2 for 2.5."""
    return math.floor(value + 0.5)


def percentage(part: float, whole: float) -> int:
    if not whole:
        return 0
    return round_half_up(100 * part / whole)


def compute_rsvp_stats(rsvps: Sequence[RSVPDTO], events: Iterable[EventDTO]) -> RSVPStatsDTO:
    counts = dict.fromkeys(RSVPStatus, 0)
    total_guests = registered = unregistered = 0
    dietary = plus_ones = accommodation = transportation = 0

    for rsvp in rsvps:
        counts[rsvp.status] += 1
        if rsvp.dietary_restrictions:
            dietary += 1
        if rsvp.status != RSVPStatus.ATTENDING:
            continue

        # A guest_count of 0 is treated as missing
        total_guests += rsvp.guest_count or 1
        profile = rsvp.profile
        if profile and profile.first_name and profile.last_name:
            registered += 1
        else:
            unregistered += 1
        if rsvp.plus_one_name:
            plus_ones += 1
        if rsvp.accommodation_needed:
            accommodation += 1
        if rsvp.transportation_needed:
            transportation += 1

    total = len(rsvps)
    total_capacity = sum(event.max_capacity or 0 for event in events)

    return RSVPStatsDTO(
        total=total,
        attending=counts[RSVPStatus.ATTENDING],
        declined=counts[RSVPStatus.DECLINED],
        pending=counts[RSVPStatus.PENDING],
        maybe=counts[RSVPStatus.MAYBE],
        total_guests=total_guests,
        registered_users=registered,
        unregistered_guests=unregistered,
        dietary_restrictions=dietary,
        plus_ones=plus_ones,
        need_accommodation=accommodation,
        need_transportation=transportation,
        response_rate=percentage(total - counts[RSVPStatus.PENDING], total),
        # Not clamped: overbooking shows up as more than 100
        capacity_used=percentage(total_guests, total_capacity),
    )


def compute_guest_stats(guests: Sequence[GuestDTO]) -> GuestStatsDTO:
    by_relationship = dict.fromkeys((r.value for r in Relationship), 0)
    for guest in guests:
        if guest.relationship:
            by_relationship[guest.relationship.value] += 1

    return GuestStatsDTO(
        total=len(guests),
        with_plus_one=sum(1 for g in guests if g.plus_one_name),
        dietary_restrictions=sum(1 for g in guests if g.dietary_restrictions),
        invitations_sent=sum(1 for g in guests if g.invitation_sent),
        pending_rsvp=sum(1 for g in guests if g.invitation_sent and not g.rsvp_deadline),
        by_relationship=by_relationship,
    )


def find_duplicate_guests(guests: Iterable[GuestDTO]) -> list[DuplicatePairDTO]:
    """Pairs of guests sharing an email, case-insensitively. The first guest seen is the original."""
    seen: dict[str, GuestDTO] = {}
    duplicates = []
    for guest in guests:
        if not guest.email:
            continue
        key = guest.email.lower()
        if key in seen:
            duplicates.append(DuplicatePairDTO(original=seen[key], duplicate=guest))
        else:
            seen[key] = guest
    return duplicates


def table_capacity_status(assigned: int, capacity: int) -> TableCapacityStatus:
    if assigned >= capacity:
        return TableCapacityStatus.FULL
    if assigned > capacity * 0.8:
        return TableCapacityStatus.ALMOST_FULL
    return TableCapacityStatus.AVAILABLE


def seating_summary(tables: Iterable[SeatingTableDTO]) -> SeatingSummaryDTO:
    seated = capacity = 0
    for table in tables:
        seated += table.assigned_guests
        capacity += table.capacity
    return SeatingSummaryDTO(total_seated=seated, total_capacity=capacity)


def effective_rsvp_deadline(event: EventDTO, days_before: int) -> datetime:
    """The stored deadline wins; otherwise the deadline falls days_before the event."""
    if event.rsvp_deadline:
        return event.rsvp_deadline
    return event.event_date - timedelta(days=days_before)

