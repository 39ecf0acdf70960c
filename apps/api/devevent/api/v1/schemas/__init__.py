from devevent.api.v1.schemas.bookings import BookingCountOut, BookingCreate, BookingOut
from devevent.api.v1.schemas.events import (
    EventCreate,
    EventListOut,
    EventOut,
    EventUpdate,
)

__all__ = [
    "EventCreate",
    "EventUpdate",
    "EventOut",
    "EventListOut",
    "BookingCreate",
    "BookingOut",
    "BookingCountOut",
]
