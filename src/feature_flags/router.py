from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel, ConfigDict

from src.common.filtering import ALL
from src.common.forms import ValueType, reject_invalid_form
from src.feature_flags.dtos import FlagNotFoundError
from src.feature_flags.evaluation import is_flag_enabled
from src.feature_flags.filters import filter_flags
from src.feature_flags.mappers import FeatureFlagForm, flag_to_form
from src.feature_flags.repository.models import (
    FeatureFlagReadModel,
    FeatureFlagWriteModel,
    SqlFeatureFlagModel,
)
from src.feature_flags.urls import (
    EVALUATE_FLAG_URL,
    FEATURE_FLAG_FORM_URL,
    FEATURE_FLAG_TOGGLE_URL,
    FEATURE_FLAG_URL,
    FEATURE_FLAGS_URL,
)
from src.realtime.change_feed import ChangeFeed, get_change_feed
from src.resources.errors import report_failure

router = APIRouter()


class FeatureFlagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    flag_key: str
    flag_name: str
    description: str
    is_enabled: bool
    rollout_percentage: int
    flag_type: ValueType
    default_value: Any
    target_users: list[str]
    excluded_users: list[str]
    conditions: dict[str, Any]


class FlagEvaluationResponse(BaseModel):
    flag_key: str
    enabled: bool
    value: Any


def get_flag_read_model() -> FeatureFlagReadModel:
    return SqlFeatureFlagModel()


def get_flag_write_model(
    change_feed: ChangeFeed = Depends(get_change_feed),
) -> FeatureFlagWriteModel:
    return SqlFeatureFlagModel(change_feed=change_feed)


@router.get(FEATURE_FLAGS_URL, response_model=list[FeatureFlagResponse])
async def list_flags(
    query: str = "",
    flag_type: str = ALL,
    flag_status: str = Query(ALL, alias="status"),
    read_model: FeatureFlagReadModel = Depends(get_flag_read_model),
) -> list[FeatureFlagResponse]:
    with report_failure("Failed to load feature flags"):
        flags = await read_model.list_flags()
    return [
        FeatureFlagResponse.model_validate(f)
        for f in filter_flags(flags, query, flag_type, flag_status)
    ]


@router.post(
    FEATURE_FLAGS_URL, response_model=FeatureFlagResponse, status_code=status.HTTP_201_CREATED
)
async def create_flag(
    form: FeatureFlagForm,
    write_model: FeatureFlagWriteModel = Depends(get_flag_write_model),
) -> FeatureFlagResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save feature flag"):
        flag = await write_model.create_flag(record)
    return FeatureFlagResponse.model_validate(flag)


@router.get(FEATURE_FLAG_FORM_URL, response_model=FeatureFlagForm)
async def flag_form(
    flag_id: UUID,
    read_model: FeatureFlagReadModel = Depends(get_flag_read_model),
) -> FeatureFlagForm:
    """The flag as edit-form values. Conditions and JSON defaults are pretty-printed."""
    with report_failure("Failed to load feature flag"):
        flag = await read_model.get_flag_by_id(flag_id)
    return flag_to_form(flag)


@router.put(FEATURE_FLAG_URL, response_model=FeatureFlagResponse)
async def update_flag(
    flag_id: UUID,
    form: FeatureFlagForm,
    write_model: FeatureFlagWriteModel = Depends(get_flag_write_model),
) -> FeatureFlagResponse:
    with reject_invalid_form():
        record = form.to_record()
    with report_failure("Failed to save feature flag"):
        flag = await write_model.update_flag(flag_id, record)
    return FeatureFlagResponse.model_validate(flag)


@router.post(FEATURE_FLAG_TOGGLE_URL, response_model=FeatureFlagResponse)
async def toggle_flag(
    flag_id: UUID,
    write_model: FeatureFlagWriteModel = Depends(get_flag_write_model),
) -> FeatureFlagResponse:
    with report_failure("Failed to toggle feature flag"):
        flag = await write_model.toggle_flag(flag_id)
    return FeatureFlagResponse.model_validate(flag)


@router.delete(FEATURE_FLAG_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_flag(
    flag_id: UUID,
    write_model: FeatureFlagWriteModel = Depends(get_flag_write_model),
) -> None:
    with report_failure("Failed to delete feature flag"):
        await write_model.delete_flag(flag_id)


@router.get(EVALUATE_FLAG_URL, response_model=FlagEvaluationResponse)
async def evaluate_flag(
    flag_key: str,
    request: Request,
    user_id: str | None = None,
    read_model: FeatureFlagReadModel = Depends(get_flag_read_model),
) -> FlagEvaluationResponse:
    """
    Whether the flag is on for a user. An unknown flag is reported as off, never as an error.

    Every other query parameter joins the evaluation context, next to the user id
    under "userId", and is compared against the flag conditions.
    """
    try:
        with report_failure("Failed to load feature flag"):
            flag = await read_model.get_flag(flag_key)
    except FlagNotFoundError:
        return FlagEvaluationResponse(flag_key=flag_key, enabled=False, value=None)

    context = {key: value for key, value in request.query_params.items() if key != "user_id"}
    if user_id is not None:
        context["userId"] = user_id

    enabled = is_flag_enabled(flag, user_id, context)
    return FlagEvaluationResponse(
        flag_key=flag_key, enabled=enabled, value=flag.default_value if enabled else None
    )
