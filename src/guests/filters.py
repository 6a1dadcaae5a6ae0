from collections.abc import Iterable

from src.common.filtering import ALL, filter_records, matches_category, matches_text
from src.guests.dtos import RSVPDTO, GuestDTO

WITH_PLUS_ONE = "with-plus-one"
DIETARY_RESTRICTIONS = "dietary-restrictions"
NO_RSVP = "no-rsvp"


def _guest_matches(guest: GuestDTO, filter_by: str | None) -> bool:
    if filter_by is None or filter_by == ALL:
        return True
    if filter_by == WITH_PLUS_ONE:
        return bool(guest.plus_one_name)
    if filter_by == DIETARY_RESTRICTIONS:
        return bool(guest.dietary_restrictions)
    if filter_by == NO_RSVP:
        return not guest.invitation_sent
    relationship = guest.relationship.value if guest.relationship else None
    return relationship == filter_by


def filter_guests(
    guests: Iterable[GuestDTO], query: str | None = None, filter_by: str | None = ALL
) -> list[GuestDTO]:
    """
    Search by email or "first last" and narrow by one of: a relationship,
    with-plus-one, dietary-restrictions or no-rsvp.
    """
    return filter_records(
        guests,
        lambda g: matches_text(query, g.email, g.full_name),
        lambda g: _guest_matches(g, filter_by),
    )


def filter_rsvps(
    rsvps: Iterable[RSVPDTO],
    query: str | None = None,
    status: str | None = ALL,
    event_id: str | None = ALL,
) -> list[RSVPDTO]:
    """Search the guest profile and narrow by status and by event id."""

    def matches_profile(rsvp: RSVPDTO) -> bool:
        if not query:
            return True
        if rsvp.profile is None:
            return False
        return matches_text(query, rsvp.profile.email, rsvp.profile.full_name)

    return filter_records(
        rsvps,
        matches_profile,
        lambda r: matches_category(status, r.status.value),
        lambda r: matches_category(event_id, str(r.event_id)),
    )
