import asyncio
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from alembic import command
from alembic.config import Config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.accommodation.router import router as accommodation_router
from src.communications.router import router as communications_router
from src.config.logging import setup_logging
from src.config.settings import settings
from src.faq.router import router as faq_router
from src.feature_flags.router import router as feature_flags_router
from src.guests.features.rsvp_dashboard.router import rsvp_dashboard
from src.guests.routers import router as guests_router
from src.realtime.router import router as realtime_router
from src.resources.dtos import RemoteCallError
from src.routers.healthz.router import router as healthz_router
from src.seo.router import router as seo_router
from src.social.router import router as social_router
from src.transport.router import router as transport_router

setup_logging()
logger = logging.getLogger(__name__)


async def run_migrations():
    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations()
    if settings.realtime_enabled:
        try:
            await rsvp_dashboard.start()
        except RemoteCallError:
            logger.warning("RSVP dashboard not live, it will load on each request")
    yield
    rsvp_dashboard.close()


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Wedding Planner API",
    description="Admin backend for guests, RSVPs and wedding logistics",
    version=settings.app_version,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(guests_router, tags=["Guests"])
app.include_router(communications_router, tags=["Communications"])
app.include_router(faq_router, tags=["FAQ"])
app.include_router(accommodation_router, tags=["Accommodation"])
app.include_router(transport_router, tags=["Transport"])
app.include_router(feature_flags_router, tags=["Feature flags"])
app.include_router(social_router, tags=["Social"])
app.include_router(seo_router, tags=["SEO"])
app.include_router(realtime_router, tags=["Realtime"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding Planner API"}
