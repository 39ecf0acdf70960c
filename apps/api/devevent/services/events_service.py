from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devevent.api.v1.schemas.events import EventCreate, EventUpdate
from devevent.models import Event
from devevent.services.error_codes import ErrorCode
from devevent.services.exceptions import ConflictError, NotFoundError
from devevent.services.normalize import (
    REQUIRED_LIST_FIELDS,
    REQUIRED_STRING_FIELDS,
    normalize_event_fields,
)

logger = structlog.get_logger()

EDITABLE_FIELDS = REQUIRED_STRING_FIELDS + REQUIRED_LIST_FIELDS


def _commit_or_conflict(db: Session, slug: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("event_slug_conflict", slug=slug)
        raise ConflictError(
            ErrorCode.SLUG_ALREADY_EXISTS.value,
            f"an event with slug {slug!r} already exists",
        ) from exc


def _ordered_events():
    return select(Event).order_by(Event.date, Event.time, Event.created_at)


def get_event(db: Session, event_id: Any) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")
    return event


def get_event_by_slug(db: Session, slug: str) -> Event:
    event = db.scalar(select(Event).where(Event.slug == slug))
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")
    return event


def create_event(db: Session, payload: EventCreate) -> Event:
    fields = normalize_event_fields(payload.model_dump())

    event = Event(**fields.as_dict())
    db.add(event)
    _commit_or_conflict(db, fields.slug)

    db.refresh(event)
    logger.info("event_created", event_id=str(event.id), slug=event.slug)
    return event


def update_event(db: Session, event_id: Any, patch: EventUpdate) -> Event:
    event = get_event(db, event_id)

    merged = {name: getattr(event, name) for name in EDITABLE_FIELDS}
    merged.update(patch.model_dump(exclude_unset=True))

    fields = normalize_event_fields(
        merged,
        previous_title=event.title,
        current_slug=event.slug,
    )

    for key, value in fields.as_dict().items():
        setattr(event, key, value)

    db.add(event)
    _commit_or_conflict(db, fields.slug)

    db.refresh(event)
    logger.info("event_updated", event_id=str(event.id), slug=event.slug)
    return event


def list_events(
    db: Session,
    *,
    page: int = 1,
    page_size: int = 20,
    tag: str | None = None,
) -> tuple[list[Event], int]:
    offset = (page - 1) * page_size

    if tag is None:
        total = int(db.scalar(select(func.count()).select_from(Event)) or 0)
        items = db.scalars(_ordered_events().offset(offset).limit(page_size)).all()
        return list(items), total

    # tags is a JSON array; containment queries differ per backend, so filter here.
    wanted = tag.strip().lower()
    matching = [
        event
        for event in db.scalars(_ordered_events())
        if wanted in {t.lower() for t in event.tags}
    ]
    return matching[offset : offset + page_size], len(matching)


def list_similar_events(db: Session, slug: str, limit: int = 3) -> list[Event]:
    event = get_event_by_slug(db, slug)
    tags = {t.lower() for t in event.tags}

    similar: list[Event] = []
    for candidate in db.scalars(_ordered_events().where(Event.id != event.id)):
        if tags & {t.lower() for t in candidate.tags}:
            similar.append(candidate)
            if len(similar) >= limit:
                break
    return similar
