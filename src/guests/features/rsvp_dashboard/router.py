from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict

from src.common.filtering import ALL
from src.communications.repository.write_models import SqlCommunicationWriteModel
from src.email_service import get_email_service
from src.guests.dtos import ActionInProgressError, RSVPStatus
from src.guests.features.rsvp_dashboard.controller import RSVPDashboard
from src.guests.repository.read_models import SqlRSVPReadModel
from src.guests.urls import ADMIN_RSVP_REMINDERS_URL, ADMIN_RSVP_STATS_URL, ADMIN_RSVPS_URL
from src.realtime.change_feed import change_feed
from src.resources.errors import report_failure

router = APIRouter()

rsvp_dashboard = RSVPDashboard(
    read_model=SqlRSVPReadModel(),
    change_feed=change_feed,
    email_service=get_email_service(),
    communication_write_model=SqlCommunicationWriteModel(change_feed=change_feed),
)


class GuestProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str | None
    first_name: str | None
    last_name: str | None
    phone: str | None


class RSVPResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    guest_id: UUID | None
    event_id: UUID
    status: RSVPStatus
    guest_count: int | None
    dietary_restrictions: str | None
    message: str | None
    plus_one_name: str | None
    table_assignment: str | None
    accommodation_needed: bool
    transportation_needed: bool
    profile: GuestProfileResponse | None
    created_at: datetime | None
    updated_at: datetime | None


class RSVPStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    attending: int
    declined: int
    pending: int
    maybe: int
    total_guests: int
    registered_users: int
    unregistered_guests: int
    dietary_restrictions: int
    plus_ones: int
    need_accommodation: int
    need_transportation: int
    response_rate: int
    capacity_used: int


class RSVPListResponse(BaseModel):
    rsvps: list[RSVPResponse]
    last_updated: datetime | None


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sent: int
    failed: int
    skipped: int


def get_dashboard() -> RSVPDashboard:
    return rsvp_dashboard


async def get_rsvp_dashboard(
    dashboard: RSVPDashboard = Depends(get_dashboard),
) -> RSVPDashboard:
    """
    Dependency to get the RSVP dashboard with freshly fetched lists.

    The change feed only reaches this process, so writes made by other workers
    or by the CLI are picked up by re-fetching on every request, live or not.
    """
    with report_failure("Failed to load RSVP data"):
        await dashboard.load()
    return dashboard


@router.get(ADMIN_RSVPS_URL, response_model=RSVPListResponse)
async def list_rsvps(
    query: str = "",
    rsvp_status: str = Query(ALL, alias="status"),
    event_id: str = ALL,
    dashboard: RSVPDashboard = Depends(get_rsvp_dashboard),
) -> RSVPListResponse:
    """RSVPs matching the profile search, the status and the event, all combined."""
    rsvps = dashboard.filtered(query, rsvp_status, event_id)
    return RSVPListResponse(
        rsvps=[RSVPResponse.model_validate(r) for r in rsvps],
        last_updated=dashboard.last_updated,
    )


@router.get(ADMIN_RSVP_STATS_URL, response_model=RSVPStatsResponse)
async def rsvp_stats(dashboard: RSVPDashboard = Depends(get_rsvp_dashboard)) -> RSVPStatsResponse:
    """Statistics over the full, unfiltered RSVP list."""
    return RSVPStatsResponse.model_validate(dashboard.stats)


@router.post(ADMIN_RSVP_REMINDERS_URL, response_model=ReminderResponse)
async def send_reminders(
    dashboard: RSVPDashboard = Depends(get_rsvp_dashboard),
) -> ReminderResponse:
    """Email a reminder to every guest with a pending RSVP."""
    try:
        with report_failure("Failed to send reminders"):
            result = await dashboard.send_reminders()
    except ActionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return ReminderResponse.model_validate(result)
