from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from src.communications.dtos import CommunicationStatus, CommunicationType, Direction
from src.communications.repository.write_models import (
    CommunicationWriteModel,
    SqlCommunicationWriteModel,
)
from src.config.settings import settings
from src.guests.dtos import RSVPStatus
from src.guests.repository.read_models import RSVPReadModel, SqlRSVPReadModel
from src.guests.repository.write_models import RSVPWriteModel, SqlRSVPWriteModel
from src.guests.stats import effective_rsvp_deadline
from src.guests.urls import RSVP_DEADLINE_URL, SUBMIT_RSVP_URL
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()


class RSVPSubmit(BaseModel):
    status: RSVPStatus
    guest_count: int = Field(default=1, ge=0)
    dietary_restrictions: str | None = None
    message: str | None = None
    plus_one_name: str | None = None
    accommodation_needed: bool = False
    transportation_needed: bool = False


class RSVPSubmitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    guest_id: UUID | None
    event_id: UUID
    status: RSVPStatus
    guest_count: int | None
    dietary_restrictions: str | None
    message: str | None
    plus_one_name: str | None
    accommodation_needed: bool
    transportation_needed: bool


class RSVPDeadlineResponse(BaseModel):
    event_id: UUID
    rsvp_deadline: datetime
    is_default: bool


def get_rsvp_write_model(change_feed: ChangeFeed = Depends(get_change_feed)) -> RSVPWriteModel:
    """Dependency to get RSVP write model instance."""
    return SqlRSVPWriteModel(change_feed=change_feed)


def get_rsvp_read_model() -> RSVPReadModel:
    return SqlRSVPReadModel()


def get_communication_log(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> CommunicationWriteModel:
    return SqlCommunicationWriteModel(change_feed=change_feed)


def _summary(rsvp: RSVPSubmit) -> str:
    lines = [f"Status: {rsvp.status.value}", f"Guests: {rsvp.guest_count}"]
    if rsvp.plus_one_name:
        lines.append(f"Plus one: {rsvp.plus_one_name}")
    if rsvp.dietary_restrictions:
        lines.append(f"Dietary: {rsvp.dietary_restrictions}")
    if rsvp.message:
        lines.append(f"Message: {rsvp.message}")
    return "\n".join(lines)


@router.put(SUBMIT_RSVP_URL, response_model=RSVPSubmitResponse)
async def submit_rsvp(
    guest_id: UUID,
    event_id: UUID,
    rsvp_data: RSVPSubmit,
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
    communication_log: CommunicationWriteModel = Depends(get_communication_log),
) -> RSVPSubmitResponse:
    """
    Record the guest's response to an event, replacing any earlier response.
    The response is also logged as an inbound communication.
    """
    with report_failure("Failed to submit RSVP"):
        rsvp = await write_model.submit_rsvp(guest_id, event_id, rsvp_data.model_dump())
        await communication_log.record(
            {
                "guest_id": guest_id,
                "communication_type": CommunicationType.EMAIL,
                "subject": f"RSVP {rsvp_data.status.value} received",
                "content": _summary(rsvp_data),
                "direction": Direction.INBOUND,
                "status": CommunicationStatus.DELIVERED,
            }
        )
    return RSVPSubmitResponse.model_validate(rsvp)


@router.get(RSVP_DEADLINE_URL, response_model=RSVPDeadlineResponse)
async def rsvp_deadline(
    event_id: UUID,
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
) -> RSVPDeadlineResponse:
    """The stored deadline, or the configured number of days before the event."""
    with report_failure("Failed to load event"):
        event = await read_model.get_event(event_id)
    return RSVPDeadlineResponse(
        event_id=event.id,
        rsvp_deadline=effective_rsvp_deadline(event, settings.rsvp_deadline_days),
        is_default=event.rsvp_deadline is None,
    )
