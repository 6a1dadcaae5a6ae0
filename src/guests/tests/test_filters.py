from uuid import uuid4

from src.guests.dtos import RSVPDTO, GuestDTO, GuestProfileDTO, Relationship, RSVPStatus
from src.guests.filters import filter_guests, filter_rsvps


def make_rsvp(status: RSVPStatus, first_name: str, email: str) -> RSVPDTO:
    return RSVPDTO(
        id=uuid4(),
        guest_id=uuid4(),
        event_id=uuid4(),
        status=status,
        profile=GuestProfileDTO(email=email, first_name=first_name, last_name="Smith"),
    )


RSVPS = [
    make_rsvp(RSVPStatus.ATTENDING, "Alice", "alice@x.com"),
    make_rsvp(RSVPStatus.ATTENDING, "Bob", "bob@x.com"),
    make_rsvp(RSVPStatus.DECLINED, "Alicia", "alicia@x.com"),
    make_rsvp(RSVPStatus.PENDING, "Carl", "carl@x.com"),
]


def test_status_and_text_are_combined_with_and():
    result = filter_rsvps(RSVPS, query="ali", status="attending")

    assert [r.profile.first_name for r in result] == ["Alice"]


def test_event_filter_is_combined_with_the_others():
    alicia = RSVPS[2]
    event_id = str(alicia.event_id)

    assert filter_rsvps(RSVPS, event_id=event_id) == [alicia]
    assert filter_rsvps(RSVPS, query="ali", status="attending", event_id=event_id) == []
    assert filter_rsvps(RSVPS, event_id="all") == RSVPS
    assert filter_rsvps(RSVPS, event_id=str(uuid4())) == []


def test_all_status_and_empty_query_keep_everything_in_order():
    assert filter_rsvps(RSVPS, query="", status="all") == RSVPS


def test_text_matches_full_name_case_insensitively():
    result = filter_rsvps(RSVPS, query="BOB SMITH")

    assert [r.profile.email for r in result] == ["bob@x.com"]


def test_rsvp_without_profile_only_matches_empty_query():
    orphan = RSVPDTO(id=uuid4(), guest_id=None, event_id=uuid4())

    assert filter_rsvps([orphan], query="") == [orphan]
    assert filter_rsvps([orphan], query="a") == []


GUESTS = [
    GuestDTO(id=uuid4(), email="ann@x.com", first_name="Ann", relationship=Relationship.FAMILY),
    GuestDTO(
        id=uuid4(),
        email="ben@x.com",
        first_name="Ben",
        relationship=Relationship.FRIEND,
        plus_one_name="Bea",
        invitation_sent=True,
    ),
    GuestDTO(
        id=uuid4(),
        email="cat@x.com",
        first_name="Cat",
        dietary_restrictions="vegan",
        invitation_sent=True,
    ),
]


def test_guest_filters():
    def emails(guests):
        return [g.email for g in guests]

    assert emails(filter_guests(GUESTS, filter_by="family")) == ["ann@x.com"]
    assert emails(filter_guests(GUESTS, filter_by="with-plus-one")) == ["ben@x.com"]
    assert emails(filter_guests(GUESTS, filter_by="dietary-restrictions")) == ["cat@x.com"]
    assert emails(filter_guests(GUESTS, filter_by="no-rsvp")) == ["ann@x.com"]
    assert emails(filter_guests(GUESTS, query="BEN", filter_by="family")) == []
