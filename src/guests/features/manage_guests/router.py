import contextlib
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, ConfigDict

from src.common.filtering import ALL
from src.common.forms import reject_invalid_form
from src.communications.dtos import CommunicationStatus, CommunicationType, Direction
from src.communications.repository.write_models import (
    CommunicationWriteModel,
    SqlCommunicationWriteModel,
)
from src.config.settings import settings
from src.email_service import EmailTemplates, get_email_service
from src.email_service.base import EmailServiceBase
from src.guests.dtos import ActionInProgressError, GuestRole, Relationship, TableCapacityStatus
from src.guests.export import export_guests_csv
from src.guests.filters import filter_guests
from src.guests.mappers import GuestForm, guest_to_form, parse_import
from src.guests.repository.read_models import (
    GuestReadModel,
    RSVPReadModel,
    SeatingReadModel,
    SqlGuestReadModel,
    SqlRSVPReadModel,
    SqlSeatingReadModel,
)
from src.guests.repository.write_models import GuestWriteModel, SqlGuestWriteModel
from src.guests.stats import (
    compute_guest_stats,
    effective_rsvp_deadline,
    find_duplicate_guests,
    seating_summary,
    table_capacity_status,
)
from src.guests.urls import (
    ADMIN_GUEST_DUPLICATES_URL,
    ADMIN_GUEST_EXPORT_URL,
    ADMIN_GUEST_FORM_URL,
    ADMIN_GUEST_IMPORT_URL,
    ADMIN_GUEST_INVITATION_URL,
    ADMIN_GUEST_STATS_URL,
    ADMIN_GUEST_URL,
    ADMIN_GUESTS_URL,
    ADMIN_SEATING_URL,
)
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()

DATE_FORMAT = "%A, %d %B %Y"

# (guest_id, event_id) pairs whose invitation is being sent
invitations_in_flight: set[tuple[UUID, UUID]] = set()


class GuestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None
    first_name: str | None
    last_name: str | None
    full_name: str
    phone: str | None
    role: GuestRole
    relationship: Relationship | None
    dietary_restrictions: str | None
    plus_one_name: str | None
    table_preference: str | None
    special_notes: str | None
    group_id: UUID | None
    invitation_sent: bool
    rsvp_deadline: datetime | None
    created_at: datetime | None


class GuestStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    with_plus_one: int
    dietary_restrictions: int
    invitations_sent: int
    pending_rsvp: int
    by_relationship: dict[str, int]


class DuplicatePairResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    original: GuestResponse
    duplicate: GuestResponse


class ImportRequest(BaseModel):
    """One guest per line: First,Last,Email,Phone,Dietary,PlusOne,Relationship,TablePref,Notes"""

    data: str


class ImportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    imported: int
    skipped: int
    failed: int


class InvitationRequest(BaseModel):
    event_id: UUID


class SeatingTableResponse(BaseModel):
    id: UUID
    table_number: int
    name: str | None
    capacity: int
    assigned_guests: int
    capacity_status: TableCapacityStatus


class SeatingResponse(BaseModel):
    tables: list[SeatingTableResponse]
    total_seated: int
    total_capacity: int


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


def get_guest_write_model(change_feed: ChangeFeed = Depends(get_change_feed)) -> GuestWriteModel:
    """Dependency to get guest write model instance."""
    return SqlGuestWriteModel(change_feed=change_feed)


def get_event_read_model() -> RSVPReadModel:
    return SqlRSVPReadModel()


def get_seating_read_model() -> SeatingReadModel:
    return SqlSeatingReadModel()


def get_invitation_email_service() -> EmailServiceBase:
    return get_email_service()


def get_communication_log(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> CommunicationWriteModel:
    return SqlCommunicationWriteModel(change_feed=change_feed)


@router.get(ADMIN_GUESTS_URL, response_model=list[GuestResponse])
async def list_guests(
    query: str = "",
    filter_by: str = ALL,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> list[GuestResponse]:
    """
    List guests matching the search text (email or name) and the filter:
    all, a relationship, with-plus-one, dietary-restrictions or no-rsvp.
    """
    with report_failure("Failed to load guests"):
        guests = await read_model.list_guests()
    return [GuestResponse.model_validate(g) for g in filter_guests(guests, query, filter_by)]


@router.get(ADMIN_GUEST_STATS_URL, response_model=GuestStatsResponse)
async def guest_stats(
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestStatsResponse:
    with report_failure("Failed to load guests"):
        guests = await read_model.list_guests()
    return GuestStatsResponse.model_validate(compute_guest_stats(guests))


@router.get(ADMIN_GUEST_DUPLICATES_URL, response_model=list[DuplicatePairResponse])
async def duplicate_guests(
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> list[DuplicatePairResponse]:
    """Guests sharing an email address. Reported only; nothing is merged or blocked."""
    with report_failure("Failed to load guests"):
        guests = await read_model.list_guests()
    return [DuplicatePairResponse.model_validate(pair) for pair in find_duplicate_guests(guests)]


@router.get(ADMIN_GUEST_EXPORT_URL)
async def export_guests(
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> Response:
    with report_failure("Failed to export guests"):
        guests = await read_model.list_guests()
    return Response(
        content=export_guests_csv(guests),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="enhanced-guest-list.csv"'},
    )


@router.post(ADMIN_GUESTS_URL, response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
async def create_guest(
    form: GuestForm,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> GuestResponse:
    with reject_invalid_form():
        record = form.to_record()

    with report_failure("Failed to add guest"):
        guest = await write_model.create_guest(record)
    return GuestResponse.model_validate(guest)


@router.post(ADMIN_GUEST_IMPORT_URL, response_model=ImportResponse)
async def import_guests(
    request: ImportRequest,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> ImportResponse:
    """Rows without an email are skipped. A failing row does not stop the import."""
    with report_failure("Failed to import guests"):
        result = await write_model.import_guests(parse_import(request.data))
    return ImportResponse.model_validate(result)


@router.get(ADMIN_GUEST_FORM_URL, response_model=GuestForm)
async def guest_form(
    guest_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> GuestForm:
    """The guest as edit-form values."""
    with report_failure("Failed to load guest"):
        guest = await read_model.get_guest(guest_id)
    return guest_to_form(guest)


@router.put(ADMIN_GUEST_URL, response_model=GuestResponse)
async def update_guest(
    guest_id: UUID,
    form: GuestForm,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> GuestResponse:
    with reject_invalid_form():
        record = form.to_record()

    with report_failure("Failed to update guest"):
        guest = await write_model.update_guest(guest_id, record)
    return GuestResponse.model_validate(guest)


@router.delete(ADMIN_GUEST_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_guest(
    guest_id: UUID,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> None:
    with report_failure("Failed to delete guest"):
        await write_model.delete_guest(guest_id)


@contextlib.contextmanager
def invitation_in_flight(guest_id: UUID, event_id: UUID):
    """Reject a second invitation for the same guest and event until the first one finishes."""
    key = (guest_id, event_id)
    if key in invitations_in_flight:
        raise ActionInProgressError(f"invitation of {guest_id} to {event_id}")
    invitations_in_flight.add(key)
    try:
        yield
    finally:
        invitations_in_flight.discard(key)


@router.post(ADMIN_GUEST_INVITATION_URL, response_model=GuestResponse)
async def send_invitation(
    guest_id: UUID,
    request: InvitationRequest,
    read_model: GuestReadModel = Depends(get_guest_read_model),
    event_read_model: RSVPReadModel = Depends(get_event_read_model),
    write_model: GuestWriteModel = Depends(get_guest_write_model),
    email_service: EmailServiceBase = Depends(get_invitation_email_service),
    communication_log: CommunicationWriteModel = Depends(get_communication_log),
) -> GuestResponse:
    """Email the guest an invitation to the event and mark the invitation as sent."""
    try:
        with invitation_in_flight(guest_id, request.event_id):
            with report_failure("Failed to send invitation"):
                guest = await read_model.get_guest(guest_id)
                event = await event_read_model.get_event(request.event_id)
                deadline = effective_rsvp_deadline(event, settings.rsvp_deadline_days)

                await email_service.send_invitation(
                    to_address=guest.email,
                    guest_name=guest.full_name.strip() or guest.email,
                    event_title=event.title,
                    event_date=event.event_date.strftime(DATE_FORMAT),
                    event_location=", ".join(filter(None, [event.venue, event.address])),
                    rsvp_url=f"{settings.frontend_url}/rsvp",
                    response_deadline=deadline.strftime(DATE_FORMAT),
                )
                await communication_log.record(
                    {
                        "guest_id": guest.id,
                        "communication_type": CommunicationType.EMAIL,
                        "subject": EmailTemplates.INVITATION_SUBJECT,
                        "content": f"Invitation to {event.title}",
                        "direction": Direction.OUTBOUND,
                        "status": CommunicationStatus.SENT,
                    }
                )
                guest = await write_model.update_guest(guest_id, {"invitation_sent": True})
    except ActionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return GuestResponse.model_validate(guest)


@router.get(ADMIN_SEATING_URL, response_model=SeatingResponse)
async def seating_overview(
    read_model: SeatingReadModel = Depends(get_seating_read_model),
) -> SeatingResponse:
    with report_failure("Failed to load seating"):
        tables = await read_model.list_tables()

    summary = seating_summary(tables)
    return SeatingResponse(
        tables=[
            SeatingTableResponse(
                id=table.id,
                table_number=table.table_number,
                name=table.name,
                capacity=table.capacity,
                assigned_guests=table.assigned_guests,
                capacity_status=table_capacity_status(table.assigned_guests, table.capacity),
            )
            for table in tables
        ],
        total_seated=summary.total_seated,
        total_capacity=summary.total_capacity,
    )
