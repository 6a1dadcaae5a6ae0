from src.communications.dtos import CommunicationStatus, Direction
from src.communications.repository.read_models import SqlCommunicationReadModel
from src.communications.repository.write_models import SqlCommunicationWriteModel
from src.guests.repository.orm_models import Guest


async def test_communications_are_joined_with_their_guest(db_session):
    guest = Guest(email="jane@example.com", first_name="Jane", last_name="Doe")
    db_session.add(guest)
    await db_session.flush()
    write_model = SqlCommunicationWriteModel(session_overwrite=db_session)

    await write_model.record({"guest_id": guest.uuid, "content": "Hello"})
    await write_model.record({"content": "No guest", "direction": Direction.INBOUND})

    communications = await SqlCommunicationReadModel(session_overwrite=db_session).list_communications()

    by_content = {c.content: c for c in communications}
    assert by_content["Hello"].guest_name == "Jane Doe"
    assert by_content["Hello"].status == CommunicationStatus.SENT
    assert by_content["No guest"].profile is None
    assert by_content["No guest"].guest_name == "Unknown"


async def test_mark_read_sets_read_at(db_session):
    write_model = SqlCommunicationWriteModel(session_overwrite=db_session)
    communication = await write_model.record(
        {"content": "Question", "direction": Direction.INBOUND, "status": CommunicationStatus.DELIVERED}
    )

    updated = await write_model.mark_read(communication.id)

    assert updated.status == CommunicationStatus.READ
    assert updated.read_at is not None
