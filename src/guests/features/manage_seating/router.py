from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict

from src.common.forms import reject_invalid_form
from src.guests.dtos import TableNumberTakenError
from src.guests.mappers import SeatingTableForm
from src.guests.repository.write_models import SeatingWriteModel, SqlSeatingWriteModel
from src.guests.urls import ADMIN_SEATING_TABLE_URL, ADMIN_SEATING_TABLES_URL
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()


class SeatingTableResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    table_number: int
    name: str | None
    capacity: int
    assigned_guests: int
    special_requirements: str | None


def get_seating_write_model(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> SeatingWriteModel:
    return SqlSeatingWriteModel(change_feed=change_feed)


@router.post(
    ADMIN_SEATING_TABLES_URL,
    response_model=SeatingTableResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_table(
    form: SeatingTableForm,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> SeatingTableResponse:
    with reject_invalid_form():
        record = form.to_record()
    try:
        with report_failure("Failed to save table"):
            table = await write_model.create_table(record)
    except TableNumberTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return SeatingTableResponse.model_validate(table)


@router.put(ADMIN_SEATING_TABLE_URL, response_model=SeatingTableResponse)
async def update_table(
    table_id: UUID,
    form: SeatingTableForm,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> SeatingTableResponse:
    with reject_invalid_form():
        record = form.to_record()
    try:
        with report_failure("Failed to save table"):
            table = await write_model.update_table(table_id, record)
    except TableNumberTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return SeatingTableResponse.model_validate(table)


@router.delete(ADMIN_SEATING_TABLE_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(
    table_id: UUID,
    write_model: SeatingWriteModel = Depends(get_seating_write_model),
) -> None:
    with report_failure("Failed to delete table"):
        await write_model.delete_table(table_id)
