from __future__ import annotations

import uuid
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devevent.api.v1.schemas.bookings import BookingCreate
from devevent.models import Booking, Event
from devevent.services.error_codes import ErrorCode
from devevent.services.exceptions import ValidationError
from devevent.services.normalize import normalize_booking_fields, normalize_event_id

logger = structlog.get_logger()


def _missing_event(event_id: uuid.UUID) -> ValidationError:
    logger.warning("booking_event_missing", event_id=str(event_id))
    return ValidationError(
        ErrorCode.EVENT_REFERENCE_MISSING.value,
        "referenced event does not exist",
        field="event_id",
    )


def ensure_event_exists(db: Session, event_id: uuid.UUID) -> None:
    found = db.scalar(select(Event.id).where(Event.id == event_id))
    if found is None:
        raise _missing_event(event_id)


def create_booking(db: Session, payload: BookingCreate) -> Booking:
    fields = normalize_booking_fields(payload.email, payload.event_id)
    ensure_event_exists(db, fields.event_id)

    booking = Booking(event_id=fields.event_id, email=fields.email)
    db.add(booking)
    try:
        db.commit()
    except IntegrityError as exc:
        # Foreign key rejected: the event was removed after the existence check.
        db.rollback()
        raise _missing_event(fields.event_id) from exc

    db.refresh(booking)
    logger.info("booking_created", booking_id=str(booking.id), event_id=str(booking.event_id))
    return booking


def list_bookings_for_event(db: Session, event_id: Any) -> list[Booking]:
    event_uuid = normalize_event_id(event_id)
    return list(
        db.scalars(
            select(Booking)
            .where(Booking.event_id == event_uuid)
            .order_by(Booking.created_at)
        )
    )


def count_bookings(db: Session, event_id: Any) -> int:
    event_uuid = normalize_event_id(event_id)
    return int(
        db.scalar(
            select(func.count())
            .select_from(Booking)
            .where(Booking.event_id == event_uuid)
        )
        or 0
    )
