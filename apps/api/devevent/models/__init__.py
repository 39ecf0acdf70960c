from devevent.models.base import Base
from devevent.models.booking import Booking
from devevent.models.event import Event

__all__ = ["Base", "Event", "Booking"]
