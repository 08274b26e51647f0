"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from event_explorer.core.events import Event


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def make_event():
    """Factory for creating events."""
    counter = iter(range(1, 10_000))

    def _make(
        title: str = "Event",
        registration_start: datetime = utc(2024, 1, 1),
        registration_end: datetime = utc(2024, 1, 10),
        event_start: datetime = utc(2024, 1, 20, 18),
        event_end: datetime | None = None,
        description: str = "",
        venue: str = "Main Hall",
        category: str = "music",
        id: str | None = None,
        poster_url: str | None = None,
        google_form_url: str | None = None,
        is_org_verified: bool = False,
    ) -> Event:
        return Event(
            id=id or f"ev-{next(counter)}",
            title=title,
            description=description,
            venue=venue,
            category=category,
            registration_start=registration_start,
            registration_end=registration_end,
            event_start=event_start,
            event_end=event_end,
            poster_url=poster_url,
            google_form_url=google_form_url,
            is_org_verified=is_org_verified,
        )

    return _make


@pytest.fixture
def event_json():
    """Factory for backend event payloads."""

    def _make(id: str = "1", **overrides) -> dict:
        data = {
            "id": id,
            "title": "Jazz Night",
            "description": "Live jazz",
            "venue": "Blue Room",
            "category": "music",
            "registration_start": "2024-01-01T00:00:00Z",
            "registration_end": "2024-01-10T00:00:00Z",
            "event_start": "2024-01-20T18:00:00Z",
            "event_end": None,
            "poster_url": None,
            "google_form_url": "https://forms.example.com/jazz",
            "is_org_verified": True,
        }
        data.update(overrides)
        return data

    return _make
