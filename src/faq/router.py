from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict

from src.common.filtering import ALL
from src.common.forms import reject_invalid_form
from src.faq.filters import filter_faq_items
from src.faq.mappers import FAQCategoryForm, FAQItemForm, category_to_form, item_to_form
from src.faq.repository.read_models import FAQReadModel, SqlFAQReadModel
from src.faq.repository.write_models import FAQWriteModel, SqlFAQWriteModel
from src.faq.urls import (
    FAQ_CATEGORIES_URL,
    FAQ_CATEGORY_FORM_URL,
    FAQ_CATEGORY_URL,
    FAQ_ITEM_FORM_URL,
    FAQ_ITEM_URL,
    FAQ_ITEMS_ORDER_URL,
    FAQ_ITEMS_URL,
    PUBLIC_FAQ_URL,
    PUBLIC_FAQ_VIEW_URL,
)
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()


class FAQCategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    description: str | None
    icon: str | None
    display_order: int
    is_active: bool


class FAQItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID | None
    question: str
    answer: str
    display_order: int
    is_active: bool
    is_featured: bool
    view_count: int


class FAQGroupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    slug: str
    icon: str | None
    description: str | None
    items: list[FAQItemResponse]


class ReorderRequest(BaseModel):
    item_ids: list[UUID]


def get_faq_read_model() -> FAQReadModel:
    return SqlFAQReadModel()


def get_faq_write_model(change_feed: ChangeFeed = Depends(get_change_feed)) -> FAQWriteModel:
    return SqlFAQWriteModel(change_feed=change_feed)


@router.get(FAQ_CATEGORIES_URL, response_model=list[FAQCategoryResponse])
async def list_categories(
    read_model: FAQReadModel = Depends(get_faq_read_model),
) -> list[FAQCategoryResponse]:
    with report_failure("Failed to load FAQ categories"):
        categories = await read_model.list_categories()
    return [FAQCategoryResponse.model_validate(c) for c in categories]


@router.post(
    FAQ_CATEGORIES_URL, response_model=FAQCategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    form: FAQCategoryForm,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> FAQCategoryResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save category"):
        category = await write_model.create_category(record)
    return FAQCategoryResponse.model_validate(category)


@router.get(FAQ_CATEGORY_FORM_URL, response_model=FAQCategoryForm)
async def category_form(
    category_id: UUID,
    read_model: FAQReadModel = Depends(get_faq_read_model),
) -> FAQCategoryForm:
    """The category as edit-form values."""
    with report_failure("Failed to load category"):
        category = await read_model.get_category(category_id)
    return category_to_form(category)


@router.put(FAQ_CATEGORY_URL, response_model=FAQCategoryResponse)
async def update_category(
    category_id: UUID,
    form: FAQCategoryForm,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> FAQCategoryResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save category"):
        category = await write_model.update_category(category_id, record)
    return FAQCategoryResponse.model_validate(category)


@router.delete(FAQ_CATEGORY_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> None:
    """Items of the deleted category become uncategorised."""
    with report_failure("Failed to delete category"):
        await write_model.delete_category(category_id)


@router.get(FAQ_ITEMS_URL, response_model=list[FAQItemResponse])
async def list_items(
    query: str = "",
    category_id: str = ALL,
    read_model: FAQReadModel = Depends(get_faq_read_model),
) -> list[FAQItemResponse]:
    with report_failure("Failed to load FAQ items"):
        items = await read_model.list_items()
    return [FAQItemResponse.model_validate(i) for i in filter_faq_items(items, query, category_id)]


@router.post(FAQ_ITEMS_URL, response_model=FAQItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    form: FAQItemForm,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> FAQItemResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save FAQ"):
        item = await write_model.create_item(record)
    return FAQItemResponse.model_validate(item)


@router.put(FAQ_ITEMS_ORDER_URL, status_code=status.HTTP_204_NO_CONTENT)
async def reorder_items(
    request: ReorderRequest,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> None:
    with report_failure("Failed to update FAQ order"):
        await write_model.reorder_items(request.item_ids)


@router.get(FAQ_ITEM_FORM_URL, response_model=FAQItemForm)
async def item_form(
    item_id: UUID,
    read_model: FAQReadModel = Depends(get_faq_read_model),
) -> FAQItemForm:
    with report_failure("Failed to load FAQ"):
        item = await read_model.get_item(item_id)
    return item_to_form(item)


@router.put(FAQ_ITEM_URL, response_model=FAQItemResponse)
async def update_item(
    item_id: UUID,
    form: FAQItemForm,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> FAQItemResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save FAQ"):
        item = await write_model.update_item(item_id, record)
    return FAQItemResponse.model_validate(item)


@router.delete(FAQ_ITEM_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> None:
    with report_failure("Failed to delete FAQ"):
        await write_model.delete_item(item_id)


@router.get(PUBLIC_FAQ_URL, response_model=list[FAQGroupResponse])
async def public_faqs(
    read_model: FAQReadModel = Depends(get_faq_read_model),
) -> list[FAQGroupResponse]:
    """Active FAQs grouped by category for the guest-facing page."""
    with report_failure("Failed to load FAQs"):
        groups = await read_model.public_faqs()
    return [FAQGroupResponse.model_validate(g) for g in groups]


@router.post(PUBLIC_FAQ_VIEW_URL, response_model=FAQItemResponse)
async def record_view(
    item_id: UUID,
    write_model: FAQWriteModel = Depends(get_faq_write_model),
) -> FAQItemResponse:
    with report_failure("Failed to record FAQ view"):
        item = await write_model.record_view(item_id)
    return FAQItemResponse.model_validate(item)
