from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict

from src.common.forms import reject_invalid_form
from src.guests.mappers import EventForm
from src.guests.repository.read_models import RSVPReadModel, SqlRSVPReadModel
from src.guests.repository.write_models import EventWriteModel, SqlEventWriteModel
from src.guests.urls import ADMIN_EVENT_URL, ADMIN_EVENTS_URL
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    event_date: datetime
    venue: str | None
    address: str | None
    rsvp_deadline: datetime | None
    max_capacity: int | None


def get_event_read_model() -> RSVPReadModel:
    return SqlRSVPReadModel()


def get_event_write_model(change_feed: ChangeFeed = Depends(get_change_feed)) -> EventWriteModel:
    """Dependency to get event write model instance."""
    return SqlEventWriteModel(change_feed=change_feed)


@router.get(ADMIN_EVENTS_URL, response_model=list[EventResponse])
async def list_events(
    read_model: RSVPReadModel = Depends(get_event_read_model),
) -> list[EventResponse]:
    """Events in date order."""
    with report_failure("Failed to load events"):
        events = await read_model.list_events()
    return [EventResponse.model_validate(e) for e in events]


@router.post(ADMIN_EVENTS_URL, response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    form: EventForm,
    write_model: EventWriteModel = Depends(get_event_write_model),
) -> EventResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save event"):
        event = await write_model.create_event(record)
    return EventResponse.model_validate(event)


@router.put(ADMIN_EVENT_URL, response_model=EventResponse)
async def update_event(
    event_id: UUID,
    form: EventForm,
    write_model: EventWriteModel = Depends(get_event_write_model),
) -> EventResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save event"):
        event = await write_model.update_event(event_id, record)
    return EventResponse.model_validate(event)


@router.delete(ADMIN_EVENT_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    write_model: EventWriteModel = Depends(get_event_write_model),
) -> None:
    """The event's RSVPs are deleted with it."""
    with report_failure("Failed to delete event"):
        await write_model.delete_event(event_id)
