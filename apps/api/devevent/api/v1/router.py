from fastapi import APIRouter

from devevent.api.v1.bookings import router as bookings_router
from devevent.api.v1.events import router as events_router

router = APIRouter()
router.include_router(events_router)
router.include_router(bookings_router)
