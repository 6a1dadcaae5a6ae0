from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from src.config.settings import settings
from src.models.base import utcnow
from src.seo.analysis import CheckStatus, Grade, PageSnapshot, Priority, analyze_page
from src.seo.sitemap import build_robots_txt, build_sitemap
from src.seo.urls import ROBOTS_URL, SEO_ANALYZE_URL, SITEMAP_URL

router = APIRouter()


class PageSnapshotRequest(BaseModel):
    title: str = ""
    description: str = ""
    h1_count: int = Field(0, ge=0)
    h2_count: int = Field(0, ge=0)
    h3_count: int = Field(0, ge=0)
    image_count: int = Field(0, ge=0)
    images_with_alt: int = Field(0, ge=0)
    internal_links: int = Field(0, ge=0)
    external_links: int = Field(0, ge=0)
    mobile_score: int = Field(0, ge=0, le=100)
    desktop_score: int = Field(0, ge=0, le=100)
    ssl: bool = False
    has_schema: bool = False
    has_robots_meta: bool = False


class TextCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    content: str
    length: int
    status: CheckStatus
    suggestions: list[str]


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    priority: Priority
    category: str
    title: str
    description: str


class SEOReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    score: int
    grade: Grade
    title: TextCheckResponse
    description: TextCheckResponse
    heading_issues: list[str]
    image_issues: list[str]
    recommendations: list[RecommendationResponse]


@router.post(SEO_ANALYZE_URL, response_model=SEOReportResponse)
async def analyze(snapshot: PageSnapshotRequest) -> SEOReportResponse:
    report = analyze_page(PageSnapshot(**snapshot.model_dump()))
    return SEOReportResponse.model_validate(report)


@router.get(SITEMAP_URL, include_in_schema=False)
async def sitemap() -> Response:
    return Response(
        content=build_sitemap(settings.frontend_url, utcnow().date()),
        media_type="application/xml",
    )


@router.get(ROBOTS_URL, response_class=PlainTextResponse, include_in_schema=False)
async def robots() -> str:
    return build_robots_txt(settings.frontend_url)
