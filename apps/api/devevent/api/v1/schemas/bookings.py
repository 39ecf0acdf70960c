from __future__ import annotations

from datetime import datetime
from uuid import UUID

from devevent.api.v1.schemas.events import SchemaBase


class BookingCreate(SchemaBase):
    event_id: str | None = None
    email: str | None = None


class BookingOut(SchemaBase):
    id: UUID
    event_id: UUID
    email: str
    created_at: datetime
    updated_at: datetime


class BookingCountOut(SchemaBase):
    event_id: UUID
    count: int
