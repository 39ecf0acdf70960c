from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from devevent.api.errors import http_error_from_service
from devevent.api.v1.schemas import (
    BookingCountOut,
    BookingOut,
    EventCreate,
    EventListOut,
    EventOut,
    EventUpdate,
)
from devevent.db import get_db
from devevent.services import (
    count_bookings,
    create_event,
    get_event,
    get_event_by_slug,
    list_bookings_for_event,
    list_events,
    list_similar_events,
    update_event,
)
from devevent.services.exceptions import ServiceError

router = APIRouter(prefix="/events", tags=["events"])

DBSession = Annotated[Session, Depends(get_db)]


@router.get("", response_model=EventListOut)
def list_events_route(
    db: DBSession,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    tag: str | None = None,
):
    items, total = list_events(db, page=page, page_size=page_size, tag=tag)
    return EventListOut(
        items=[EventOut.model_validate(event) for event in items],
        page=page,
        page_size=page_size,
        total=total,
    )


@router.post("", response_model=EventOut, status_code=201)
def create_event_route(payload: EventCreate, db: DBSession):
    try:
        return create_event(db, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from err


@router.get("/{slug}", response_model=EventOut)
def get_event_route(slug: str, db: DBSession):
    try:
        return get_event_by_slug(db, slug)
    except ServiceError as err:
        raise http_error_from_service(err) from err


@router.get("/{slug}/similar", response_model=list[EventOut])
def similar_events_route(slug: str, db: DBSession, limit: int = Query(3, ge=1, le=20)):
    try:
        return list_similar_events(db, slug, limit=limit)
    except ServiceError as err:
        raise http_error_from_service(err) from err


@router.patch("/{event_id}", response_model=EventOut)
def update_event_route(event_id: UUID, patch: EventUpdate, db: DBSession):
    try:
        return update_event(db, event_id, patch)
    except ServiceError as err:
        raise http_error_from_service(err) from err


@router.get("/{event_id}/bookings", response_model=list[BookingOut])
def list_bookings_route(event_id: UUID, db: DBSession):
    try:
        get_event(db, event_id)
        return list_bookings_for_event(db, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from err


@router.get("/{event_id}/bookings/count", response_model=BookingCountOut)
def count_bookings_route(event_id: UUID, db: DBSession):
    try:
        get_event(db, event_id)
        return BookingCountOut(event_id=event_id, count=count_bookings(db, event_id))
    except ServiceError as err:
        raise http_error_from_service(err) from err
