"""
Pre-persist validation and normalization for events and bookings.

Every write in the stores goes through these functions first; they either
return a fully normalized field set or raise ``ValidationError`` naming the
offending field. Nothing here touches the database.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as dateutil_parser

from devevent.services.error_codes import ErrorCode
from devevent.services.exceptions import ValidationError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_STRING_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)
REQUIRED_LIST_FIELDS = ("agenda", "tags")

# Two far-apart defaults: a value whose date parts are incomplete resolves
# differently under each and is rejected.
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


@dataclass(frozen=True)
class EventFields:
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

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BookingFields:
    event_id: uuid.UUID
    email: str


def generate_slug(title: str) -> str:
    """Lowercase, hyphen-separated, ``[a-z0-9-]`` only."""
    slug = title.strip().lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    return re.sub(r"-+", "-", slug)


def normalize_date(value: str) -> str:
    """Parse ``value`` as a calendar date and return it as ``YYYY-MM-DD``.

    Timezone-aware inputs are converted to UTC before the date is taken.
    """
    raw = value.strip()
    try:
        parsed = dateutil_parser.isoparse(raw)
    except (ValueError, OverflowError):
        parsed = _parse_loose_date(raw)

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc)
        except OverflowError as exc:
            # e.g. 9999-12-31T23:00-05:00 lands past datetime.max in UTC
            raise _invalid_date(raw) from exc
    return parsed.date().isoformat()


def _parse_loose_date(raw: str) -> datetime:
    try:
        first = dateutil_parser.parse(raw, default=_DEFAULT_A)
        second = dateutil_parser.parse(raw, default=_DEFAULT_B)
    except (ValueError, OverflowError) as exc:
        raise _invalid_date(raw) from exc

    if first.date() != second.date():
        raise _invalid_date(raw)
    return first


def _invalid_date(raw: str) -> ValidationError:
    return ValidationError(
        ErrorCode.INVALID_DATE.value,
        f"invalid date {raw!r}; expected a parsable date such as YYYY-MM-DD",
        field="date",
    )


def normalize_time(value: str) -> str:
    raw = value.strip()
    match = TIME_PATTERN.match(raw)
    if not match:
        raise ValidationError(
            ErrorCode.INVALID_TIME.value,
            f"invalid time {raw!r}; expected HH:MM in 24-hour format",
            field="time",
        )
    hours, minutes = match.groups()
    return f"{hours}:{minutes}"


def _require_string(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            ErrorCode.FIELD_REQUIRED.value,
            f'field "{name}" is required and must be a non-empty string',
            field=name,
        )
    return value.strip()


def _require_string_list(fields: Mapping[str, Any], name: str) -> list[str]:
    value = fields.get(name)
    if (
        not isinstance(value, (list, tuple))
        or not value
        or not all(isinstance(item, str) and item.strip() for item in value)
    ):
        raise ValidationError(
            ErrorCode.LIST_REQUIRED.value,
            f'field "{name}" must contain at least one non-empty item',
            field=name,
        )
    return [item.strip() for item in value]


def normalize_event_fields(
    fields: Mapping[str, Any],
    *,
    previous_title: str | None = None,
    current_slug: str | None = None,
) -> EventFields:
    """Validate and normalize a complete set of event fields.

    ``previous_title`` and ``current_slug`` describe the stored record when
    updating; the slug is regenerated only when the title changed or no slug
    exists yet.
    """
    strings = {name: _require_string(fields, name) for name in REQUIRED_STRING_FIELDS}
    lists = {name: _require_string_list(fields, name) for name in REQUIRED_LIST_FIELDS}

    strings["date"] = normalize_date(strings["date"])
    strings["time"] = normalize_time(strings["time"])

    slug = current_slug
    if not slug or strings["title"] != previous_title:
        slug = generate_slug(strings["title"])
        if not slug:
            raise ValidationError(
                ErrorCode.INVALID_SLUG.value,
                'field "title" must contain at least one letter or digit',
                field="title",
            )

    return EventFields(slug=slug, **strings, **lists)


def normalize_email(value: Any) -> str:
    email = value.strip().lower() if isinstance(value, str) else ""
    if not email or not EMAIL_PATTERN.match(email):
        raise ValidationError(
            ErrorCode.INVALID_EMAIL.value,
            "email must be a valid, non-empty email address",
            field="email",
        )
    return email


def normalize_event_id(value: Any) -> uuid.UUID:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(
            ErrorCode.FIELD_REQUIRED.value, 'field "event_id" is required', field="event_id"
        )
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except ValueError as exc:
        raise ValidationError(
            ErrorCode.INVALID_EVENT_ID.value,
            f"event_id {value!r} is not a valid identifier",
            field="event_id",
        ) from exc


def normalize_booking_fields(email: Any, event_id: Any) -> BookingFields:
    return BookingFields(event_id=normalize_event_id(event_id), email=normalize_email(email))
