from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select

import devevent.services.bookings_service as bookings_module
from devevent.api.v1.schemas import BookingCreate
from devevent.models import Booking
from devevent.services import count_bookings, create_booking, create_event, list_bookings_for_event
from devevent.services.error_codes import ErrorCode
from devevent.services.exceptions import ValidationError
from tests.helpers import event_create


def test_booking_for_existing_event(db_session):
    event = create_event(db_session, event_create())

    booking = create_booking(
        db_session,
        BookingCreate(event_id=str(event.id), email="  Jane@Example.COM "),
    )

    assert booking.id is not None
    assert booking.event_id == event.id
    assert booking.email == "jane@example.com"
    assert booking.created_at is not None


def test_booking_for_missing_event_rejected(db_session):
    with pytest.raises(ValidationError) as exc_info:
        create_booking(
            db_session,
            BookingCreate(event_id=str(uuid.uuid4()), email="jane@example.com"),
        )

    assert exc_info.value.code == ErrorCode.EVENT_REFERENCE_MISSING.value
    assert exc_info.value.field == "event_id"
    assert db_session.scalar(select(func.count()).select_from(Booking)) == 0


def test_booking_without_event_id_rejected(db_session):
    with pytest.raises(ValidationError) as exc_info:
        create_booking(db_session, BookingCreate(email="jane@example.com"))
    assert exc_info.value.field == "event_id"


def test_booking_with_invalid_email_rejected(db_session):
    event = create_event(db_session, event_create())

    with pytest.raises(ValidationError) as exc_info:
        create_booking(db_session, BookingCreate(event_id=str(event.id), email="jane@"))
    assert exc_info.value.code == ErrorCode.INVALID_EMAIL.value


def test_bookings_listed_and_counted_per_event(db_session):
    first = create_event(db_session, event_create(title="First"))
    second = create_event(db_session, event_create(title="Second"))

    for email in ("a@example.com", "b@example.com"):
        create_booking(db_session, BookingCreate(event_id=str(first.id), email=email))
    create_booking(db_session, BookingCreate(event_id=str(second.id), email="c@example.com"))

    assert count_bookings(db_session, first.id) == 2
    assert count_bookings(db_session, second.id) == 1
    assert {b.email for b in list_bookings_for_event(db_session, first.id)} == {
        "a@example.com",
        "b@example.com",
    }


def test_booking_is_normalized_and_checked_once(db_session, monkeypatch):
    event = create_event(db_session, event_create())
    calls = {"normalize": 0, "exists": 0}
    real_normalize = bookings_module.normalize_booking_fields
    real_exists = bookings_module.ensure_event_exists

    def counting_normalize(*args, **kwargs):
        calls["normalize"] += 1
        return real_normalize(*args, **kwargs)

    def counting_exists(*args, **kwargs):
        calls["exists"] += 1
        return real_exists(*args, **kwargs)

    monkeypatch.setattr(bookings_module, "normalize_booking_fields", counting_normalize)
    monkeypatch.setattr(bookings_module, "ensure_event_exists", counting_exists)

    create_booking(db_session, BookingCreate(event_id=str(event.id), email="jane@example.com"))

    assert calls == {"normalize": 1, "exists": 1}
