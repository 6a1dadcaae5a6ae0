from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, ConfigDict

from src.common.filtering import ALL
from src.common.forms import reject_invalid_form
from src.communications.dtos import CommunicationStatus, CommunicationType, Direction
from src.communications.export import export_communications_csv
from src.communications.filters import filter_communications
from src.communications.mappers import MessageForm
from src.communications.repository.read_models import (
    CommunicationReadModel,
    SqlCommunicationReadModel,
)
from src.communications.repository.write_models import (
    CommunicationWriteModel,
    SqlCommunicationWriteModel,
)
from src.communications.stats import compute_communication_stats
from src.communications.urls import (
    COMMUNICATION_READ_URL,
    COMMUNICATION_URL,
    COMMUNICATIONS_EXPORT_URL,
    COMMUNICATIONS_URL,
)
from src.models.base import utcnow
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()


class GuestProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str | None
    first_name: str | None
    last_name: str | None


class CommunicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    guest_id: UUID | None
    communication_type: CommunicationType
    subject: str | None
    content: str
    direction: Direction
    status: CommunicationStatus
    sent_by: str | None
    scheduled_for: datetime | None
    delivered_at: datetime | None
    read_at: datetime | None
    created_at: datetime | None
    profile: GuestProfileResponse | None


class CommunicationStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    sent_today: int
    unread: int
    failed: int


class CommunicationListResponse(BaseModel):
    communications: list[CommunicationResponse]
    stats: CommunicationStatsResponse


def get_communication_read_model() -> CommunicationReadModel:
    """Dependency to get communication read model instance."""
    return SqlCommunicationReadModel()


def get_communication_write_model(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> CommunicationWriteModel:
    """Dependency to get communication write model instance."""
    return SqlCommunicationWriteModel(change_feed=change_feed)


@router.get(COMMUNICATIONS_URL, response_model=CommunicationListResponse)
async def list_communications(
    query: str = "",
    communication_type: str = ALL,
    communication_status: str = Query(ALL, alias="status"),
    direction: str = ALL,
    read_model: CommunicationReadModel = Depends(get_communication_read_model),
) -> CommunicationListResponse:
    """
    List guest communications, newest first.
    Stats are computed over the full list; the filters only narrow the returned messages.
    """
    with report_failure("Failed to load messages"):
        communications = await read_model.list_communications()

    stats = compute_communication_stats(communications, today=utcnow().date())
    filtered = filter_communications(
        communications,
        query=query,
        communication_type=communication_type,
        status=communication_status,
        direction=direction,
    )
    return CommunicationListResponse(
        communications=[CommunicationResponse.model_validate(c) for c in filtered],
        stats=CommunicationStatsResponse.model_validate(stats),
    )


@router.get(COMMUNICATIONS_EXPORT_URL)
async def export_communications(
    read_model: CommunicationReadModel = Depends(get_communication_read_model),
) -> Response:
    with report_failure("Failed to export communications"):
        communications = await read_model.list_communications()

    filename = f"guest-communications-{utcnow().date().isoformat()}.csv"
    return Response(
        content=export_communications_csv(communications),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    COMMUNICATIONS_URL,
    response_model=CommunicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    form: MessageForm,
    write_model: CommunicationWriteModel = Depends(get_communication_write_model),
) -> CommunicationResponse:
    """Record an outbound message. Scheduled messages are stored as drafts."""
    with reject_invalid_form():
        record = form.to_record(now=utcnow())

    with report_failure("Failed to send message"):
        communication = await write_model.record(record)
    return CommunicationResponse.model_validate(communication)


@router.post(COMMUNICATION_READ_URL, response_model=CommunicationResponse)
async def mark_as_read(
    communication_id: UUID,
    write_model: CommunicationWriteModel = Depends(get_communication_write_model),
) -> CommunicationResponse:
    with report_failure("Failed to update message status"):
        communication = await write_model.mark_read(communication_id)
    return CommunicationResponse.model_validate(communication)


@router.delete(COMMUNICATION_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_communication(
    communication_id: UUID,
    write_model: CommunicationWriteModel = Depends(get_communication_write_model),
) -> None:
    with report_failure("Failed to delete message"):
        await write_model.delete(communication_id)
