from fastapi import APIRouter

from .features.manage_events.router import router as manage_events_router
from .features.manage_guests.router import router as manage_guests_router
from .features.manage_seating.router import router as manage_seating_router
from .features.rsvp_dashboard.router import router as rsvp_dashboard_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(manage_guests_router)
router.include_router(manage_events_router)
router.include_router(manage_seating_router)
router.include_router(rsvp_dashboard_router)
router.include_router(submit_rsvp_router)
