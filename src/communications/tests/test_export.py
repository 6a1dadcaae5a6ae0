from datetime import datetime, timezone
from uuid import uuid4

from src.communications.dtos import CommunicationDTO, CommunicationType, Direction
from src.communications.export import content_preview, export_communications_csv
from src.communications.filters import filter_communications
from src.guests.dtos import GuestProfileDTO


def test_content_preview():
    assert content_preview("x" * 100) == "x" * 100
    assert content_preview("x" * 101) == "x" * 100 + "..."


def test_export_quotes_every_cell_but_not_the_header():
    communication = CommunicationDTO(
        id=uuid4(),
        content='She said "yes", twice',
        subject="Re: dinner",
        created_at=datetime(2026, 6, 1, 12, tzinfo=timezone.utc),
        profile=GuestProfileDTO(email="jane@example.com", first_name="Jane", last_name="Doe"),
    )

    lines = export_communications_csv([communication]).splitlines()

    assert lines[0] == "Date,Guest,Type,Direction,Subject,Content,Status"
    assert lines[1] == (
        '"2026-06-01","Jane Doe","email","outbound","Re: dinner",'
        '"She said ""yes"", twice","sent"'
    )


def test_export_without_guest():
    communication = CommunicationDTO(id=uuid4(), content="orphan")

    [_, row] = export_communications_csv([communication]).splitlines()

    assert row == '"","Unknown","email","outbound","","orphan","sent"'


def test_filters_combine():
    jane = GuestProfileDTO(email="jane@example.com", first_name="Jane")
    communications = [
        CommunicationDTO(id=uuid4(), content="Menu choice", profile=jane),
        CommunicationDTO(
            id=uuid4(),
            content="Call back",
            communication_type=CommunicationType.PHONE,
            profile=jane,
        ),
        CommunicationDTO(id=uuid4(), content="Thanks!", direction=Direction.INBOUND, subject="menu"),
    ]

    assert len(filter_communications(communications, query="menu")) == 2
    assert len(filter_communications(communications, query="jane", communication_type="phone")) == 1
    assert filter_communications(communications, query="menu", direction="inbound") == [
        communications[2]
    ]
