from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SchemaBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


# Input fields are loosely typed on purpose: the event store validates and
# normalizes them, so errors carry a field name and an error code.
class EventCreate(SchemaBase):
    title: str | None = None
    description: str | None = None
    overview: str | None = None
    image: str | None = None
    venue: str | None = None
    location: str | None = None
    date: str | None = None
    time: str | None = None
    mode: str | None = None
    audience: str | None = None
    agenda: list[str] | None = None
    organizer: str | None = None
    tags: list[str] | None = None


class EventUpdate(EventCreate):
    pass


class EventOut(SchemaBase):
    id: UUID
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: list[str]
    organizer: str
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class EventListOut(SchemaBase):
    items: list[EventOut]
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total: int = Field(ge=0)
