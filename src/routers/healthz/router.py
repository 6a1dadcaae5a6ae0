from fastapi import APIRouter
from pydantic import BaseModel

from src.config.settings import settings

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    service: str = "wedding-planner-api"
    version: str = settings.app_version


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Liveness probe. The store is not contacted."""
    return HealthCheckResponse(status="healthy")
