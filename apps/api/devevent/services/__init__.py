from devevent.services.bookings_service import count_bookings, create_booking, list_bookings_for_event
from devevent.services.events_service import (
    create_event,
    get_event,
    get_event_by_slug,
    list_events,
    list_similar_events,
    update_event,
)

__all__ = [
    "create_event",
    "update_event",
    "get_event",
    "get_event_by_slug",
    "list_events",
    "list_similar_events",
    "create_booking",
    "list_bookings_for_event",
    "count_bookings",
]
