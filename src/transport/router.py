from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.common.forms import reject_invalid_form
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure
from src.transport.dtos import TransportOptionDTO
from src.transport.mappers import TransportForm, transport_to_form
from src.transport.repository.models import (
    SqlTransportModel,
    TransportReadModel,
    TransportWriteModel,
)
from src.transport.urls import (
    PUBLIC_TRANSPORT_URL,
    TRANSPORT_OPTION_FORM_URL,
    TRANSPORT_OPTION_URL,
    TRANSPORT_OPTIONS_URL,
)

router = APIRouter()


class TransportOptionResponse(BaseModel):
    id: UUID
    category_id: UUID | None
    method_name: str
    description: str | None
    pickup_locations: list[str]
    cost_info: str | None
    booking_required: bool
    booking_phone: str | None
    capacity_info: str | None
    max_capacity: int | None
    current_bookings: int
    remaining_capacity: int | None
    featured: bool
    display_order: int
    is_active: bool

    @classmethod
    def from_dto(cls, option: TransportOptionDTO) -> "TransportOptionResponse":
        return cls(
            id=option.id,
            category_id=option.category_id,
            method_name=option.method_name,
            description=option.description,
            pickup_locations=option.pickup_locations,
            cost_info=option.cost_info,
            booking_required=option.booking_required,
            booking_phone=option.booking_phone,
            capacity_info=option.capacity_info,
            max_capacity=option.max_capacity,
            current_bookings=option.current_bookings,
            remaining_capacity=option.remaining_capacity,
            featured=option.featured,
            display_order=option.display_order,
            is_active=option.is_active,
        )


def get_transport_read_model() -> TransportReadModel:
    return SqlTransportModel()


def get_transport_write_model(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> TransportWriteModel:
    return SqlTransportModel(change_feed=change_feed)


@router.get(TRANSPORT_OPTIONS_URL, response_model=list[TransportOptionResponse])
async def list_options(
    read_model: TransportReadModel = Depends(get_transport_read_model),
) -> list[TransportOptionResponse]:
    with report_failure("Failed to load transportation options"):
        options = await read_model.list_options()
    return [TransportOptionResponse.from_dto(o) for o in options]


@router.post(
    TRANSPORT_OPTIONS_URL, response_model=TransportOptionResponse, status_code=status.HTTP_201_CREATED
)
async def create_option(
    form: TransportForm,
    write_model: TransportWriteModel = Depends(get_transport_write_model),
) -> TransportOptionResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save transportation option"):
        option = await write_model.create_option(record)
    return TransportOptionResponse.from_dto(option)


@router.get(TRANSPORT_OPTION_FORM_URL, response_model=TransportForm)
async def option_form(
    option_id: UUID,
    read_model: TransportReadModel = Depends(get_transport_read_model),
) -> TransportForm:
    with report_failure("Failed to load transportation option"):
        option = await read_model.get_option(option_id)
    return transport_to_form(option)


@router.put(TRANSPORT_OPTION_URL, response_model=TransportOptionResponse)
async def update_option(
    option_id: UUID,
    form: TransportForm,
    write_model: TransportWriteModel = Depends(get_transport_write_model),
) -> TransportOptionResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save transportation option"):
        option = await write_model.update_option(option_id, record)
    return TransportOptionResponse.from_dto(option)


@router.delete(TRANSPORT_OPTION_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_option(
    option_id: UUID,
    write_model: TransportWriteModel = Depends(get_transport_write_model),
) -> None:
    with report_failure("Failed to delete transportation option"):
        await write_model.delete_option(option_id)


@router.get(PUBLIC_TRANSPORT_URL, response_model=list[TransportOptionResponse])
async def public_options(
    read_model: TransportReadModel = Depends(get_transport_read_model),
) -> list[TransportOptionResponse]:
    with report_failure("Failed to load transportation options"):
        options = await read_model.list_options(active_only=True)
    return [TransportOptionResponse.from_dto(o) for o in options]
