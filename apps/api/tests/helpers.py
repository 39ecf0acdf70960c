from __future__ import annotations

from typing import Any

from devevent.api.v1.schemas import EventCreate


def event_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Tech Meetup 2024",
        "description": "An evening of lightning talks.",
        "overview": "Talks, pizza and networking.",
        "image": "/images/event1.png",
        "venue": "Main Hall",
        "location": "Berlin, Germany",
        "date": "2024-03-05",
        "time": "18:30",
        "mode": "offline",
        "audience": "Developers",
        "agenda": ["Doors open", "Talks", "Networking"],
        "organizer": "Berlin Devs",
        "tags": ["python", "web"],
    }
    payload.update(overrides)
    return payload


def event_create(**overrides: Any) -> EventCreate:
    return EventCreate(**event_payload(**overrides))
