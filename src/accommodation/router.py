import posixpath
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, UploadFile, status
from pydantic import BaseModel, ConfigDict

from src.accommodation.mappers import (
    AccommodationCategoryForm,
    AccommodationForm,
    accommodation_to_form,
)
from src.accommodation.repository.read_models import (
    AccommodationReadModel,
    SqlAccommodationReadModel,
)
from src.accommodation.repository.write_models import (
    AccommodationWriteModel,
    SqlAccommodationWriteModel,
)
from src.accommodation.urls import (
    ACCOMMODATION_CATEGORIES_URL,
    ACCOMMODATION_OPTION_ACTIVE_URL,
    ACCOMMODATION_OPTION_FORM_URL,
    ACCOMMODATION_OPTION_IMAGE_URL,
    ACCOMMODATION_OPTION_URL,
    ACCOMMODATION_OPTIONS_URL,
    PUBLIC_ACCOMMODATION_URL,
)
from src.common.forms import reject_invalid_form
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure
from src.storage.file_store import FileStore, get_file_store

router = APIRouter()

IMAGE_BUCKET = "accommodation-images"


class AccommodationCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    icon: str | None
    display_order: int
    is_active: bool


class AccommodationOptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID | None
    name: str
    type: str | None
    area: str | None
    address: str | None
    description: str | None
    website_url: str | None
    booking_url: str | None
    phone: str | None
    email: str | None
    price_range: str | None
    distance_from_venue: str | None
    amenities: list[str]
    image_url: str | None
    coordinates: list[float] | None
    featured: bool
    display_order: int
    is_active: bool


class ActiveRequest(BaseModel):
    is_active: bool


def get_accommodation_read_model() -> AccommodationReadModel:
    return SqlAccommodationReadModel()


def get_accommodation_write_model(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> AccommodationWriteModel:
    return SqlAccommodationWriteModel(change_feed=change_feed)


@router.get(ACCOMMODATION_CATEGORIES_URL, response_model=list[AccommodationCategoryResponse])
async def list_categories(
    read_model: AccommodationReadModel = Depends(get_accommodation_read_model),
) -> list[AccommodationCategoryResponse]:
    with report_failure("Failed to load accommodation categories"):
        categories = await read_model.list_categories()
    return [AccommodationCategoryResponse.model_validate(c) for c in categories]


@router.post(
    ACCOMMODATION_CATEGORIES_URL,
    response_model=AccommodationCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    form: AccommodationCategoryForm,
    write_model: AccommodationWriteModel = Depends(get_accommodation_write_model),
) -> AccommodationCategoryResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save category"):
        category = await write_model.create_category(record)
    return AccommodationCategoryResponse.model_validate(category)


@router.get(ACCOMMODATION_OPTIONS_URL, response_model=list[AccommodationOptionResponse])
async def list_options(
    read_model: AccommodationReadModel = Depends(get_accommodation_read_model),
) -> list[AccommodationOptionResponse]:
    with report_failure("Failed to load accommodation data"):
        options = await read_model.list_options()
    return [AccommodationOptionResponse.model_validate(o) for o in options]


@router.post(
    ACCOMMODATION_OPTIONS_URL,
    response_model=AccommodationOptionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_option(
    form: AccommodationForm,
    write_model: AccommodationWriteModel = Depends(get_accommodation_write_model),
) -> AccommodationOptionResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save accommodation"):
        option = await write_model.create_option(record)
    return AccommodationOptionResponse.model_validate(option)


@router.get(ACCOMMODATION_OPTION_FORM_URL, response_model=AccommodationForm)
async def option_form(
    option_id: UUID,
    read_model: AccommodationReadModel = Depends(get_accommodation_read_model),
) -> AccommodationForm:
    """The option as edit-form values: amenities comma-joined, coordinates as "lng,lat"."""
    with report_failure("Failed to load accommodation"):
        option = await read_model.get_option(option_id)
    return accommodation_to_form(option)


@router.put(ACCOMMODATION_OPTION_URL, response_model=AccommodationOptionResponse)
async def update_option(
    option_id: UUID,
    form: AccommodationForm,
    write_model: AccommodationWriteModel = Depends(get_accommodation_write_model),
) -> AccommodationOptionResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save accommodation"):
        option = await write_model.update_option(option_id, record)
    return AccommodationOptionResponse.model_validate(option)


@router.put(ACCOMMODATION_OPTION_ACTIVE_URL, response_model=AccommodationOptionResponse)
async def set_active(
    option_id: UUID,
    request: ActiveRequest,
    write_model: AccommodationWriteModel = Depends(get_accommodation_write_model),
) -> AccommodationOptionResponse:
    with report_failure("Failed to update accommodation status"):
        option = await write_model.update_option(option_id, {"is_active": request.is_active})
    return AccommodationOptionResponse.model_validate(option)


@router.delete(ACCOMMODATION_OPTION_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_option(
    option_id: UUID,
    write_model: AccommodationWriteModel = Depends(get_accommodation_write_model),
) -> None:
    with report_failure("Failed to delete accommodation"):
        await write_model.delete_option(option_id)


@router.post(ACCOMMODATION_OPTION_IMAGE_URL, response_model=AccommodationOptionResponse)
async def upload_image(
    option_id: UUID,
    image: UploadFile,
    write_model: AccommodationWriteModel = Depends(get_accommodation_write_model),
    file_store: FileStore = Depends(get_file_store),
) -> AccommodationOptionResponse:
    """Store the image in the file store and point the option at its public URL."""
    extension = posixpath.splitext(image.filename or "")[1].lower() or ".jpg"
    path = f"{option_id}/{uuid4()}{extension}"
    with report_failure("Failed to upload image"):
        url = await file_store.upload(
            IMAGE_BUCKET,
            path,
            await image.read(),
            content_type=image.content_type or "application/octet-stream",
        )
        option = await write_model.update_option(option_id, {"image_url": url})
    return AccommodationOptionResponse.model_validate(option)


@router.get(PUBLIC_ACCOMMODATION_URL, response_model=list[AccommodationOptionResponse])
async def public_options(
    read_model: AccommodationReadModel = Depends(get_accommodation_read_model),
) -> list[AccommodationOptionResponse]:
    """Active options for the guest-facing accommodation page."""
    with report_failure("Failed to load accommodation"):
        options = await read_model.list_options(active_only=True)
    return [AccommodationOptionResponse.model_validate(o) for o in options]
