"""Tests for section assembly."""

from datetime import datetime, timezone

import pytest

from event_explorer.core.events import EventCollection, RegistrationStatus
from event_explorer.core.grouping import EventCard, build_sections


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


NOW = utc(2024, 1, 5)


@pytest.fixture
def open_event(make_event):
    def _make(title, **kwargs):
        return make_event(
            title=title,
            registration_start=utc(2024, 1, 1),
            registration_end=utc(2024, 1, 10),
            **kwargs,
        )
    return _make


@pytest.fixture
def upcoming_event(make_event):
    def _make(title, **kwargs):
        return make_event(
            title=title,
            registration_start=utc(2024, 2, 1),
            registration_end=utc(2024, 2, 10),
            **kwargs,
        )
    return _make


@pytest.fixture
def closed_event(make_event):
    def _make(title, **kwargs):
        return make_event(
            title=title,
            registration_start=utc(2023, 12, 1),
            registration_end=utc(2023, 12, 31),
            **kwargs,
        )
    return _make


class TestBuildSections:
    def test_fixed_order(self, open_event, upcoming_event, closed_event):
        collection = EventCollection.from_buckets(
            [open_event("A")], [upcoming_event("B")], [closed_event("C")]
        )

        sections = build_sections(collection, "", NOW)

        assert [s.status for s in sections] == [
            RegistrationStatus.OPEN,
            RegistrationStatus.UPCOMING,
            RegistrationStatus.CLOSED,
        ]
        assert [s.title for s in sections] == ["Registration Open", "Opening Soon", "Closed"]

    def test_omits_empty_buckets(self, open_event, closed_event):
        collection = EventCollection.from_buckets([open_event("A")], [], [closed_event("C")])

        sections = build_sections(collection, "", NOW)

        assert [s.status for s in sections] == [RegistrationStatus.OPEN, RegistrationStatus.CLOSED]

    def test_omits_bucket_emptied_by_query(self, open_event, upcoming_event):
        collection = EventCollection.from_buckets(
            [open_event("Jazz Night")], [upcoming_event("Rock Fest")], []
        )

        sections = build_sections(collection, "jazz", NOW)

        assert len(sections) == 1
        assert sections[0].status is RegistrationStatus.OPEN

    def test_renders_all_and_only_members_in_order(self, make_event):
        events = [
            make_event(title=f"Open {i}", event_start=utc(2024, 1, 20 + i))
            for i in range(3)
        ]
        collection = EventCollection.from_buckets(events, [], [])

        sections = build_sections(collection, "", NOW)

        assert [c.event for c in sections[0].cards] == events
        assert [c.key for c in sections[0].cards] == [e.id for e in events]

    def test_empty_collection_has_no_sections(self):
        assert build_sections(EventCollection.empty(), "", NOW) == []

    def test_label_matches_section(self, make_event):
        # Backend put it in "upcoming" but its window is open at NOW
        stale = make_event(title="Opened", registration_start=utc(2024, 1, 4))
        collection = EventCollection.from_buckets([], [stale], [])

        sections = build_sections(collection, "", NOW)

        assert len(sections) == 1
        assert sections[0].status is RegistrationStatus.OPEN
        assert sections[0].cards[0].status_label == "Registration Open"


class TestEventCard:
    def test_register_offered_when_open(self, open_event):
        card = EventCard(open_event("A", google_form_url="https://f/a"), RegistrationStatus.OPEN)
        assert card.register_url == "https://f/a"

    def test_register_offered_when_upcoming(self, upcoming_event):
        card = EventCard(upcoming_event("B", google_form_url="https://f/b"), RegistrationStatus.UPCOMING)
        assert card.register_url == "https://f/b"

    def test_register_hidden_when_closed(self, closed_event):
        card = EventCard(closed_event("C", google_form_url="https://f/c"), RegistrationStatus.CLOSED)
        assert card.register_url is None

    def test_register_hidden_without_link(self, open_event):
        card = EventCard(open_event("A"), RegistrationStatus.OPEN)
        assert card.register_url is None

    def test_poster(self, open_event):
        with_poster = EventCard(open_event("A", poster_url="https://p/a.png"), RegistrationStatus.OPEN)
        without = EventCard(open_event("B"), RegistrationStatus.OPEN)
        assert with_poster.poster_url == "https://p/a.png"
        assert without.poster_url is None

    def test_format_when_with_end(self, open_event):
        card = EventCard(
            open_event("A", event_start=utc(2024, 1, 20, 18), event_end=utc(2024, 1, 20, 21)),
            RegistrationStatus.OPEN,
        )
        assert card.format_when() == "2024-01-20 18:00 → 2024-01-20 21:00"

    def test_format_when_without_end(self, open_event):
        card = EventCard(open_event("A", event_start=utc(2024, 1, 20, 18)), RegistrationStatus.OPEN)
        assert card.format_when() == "2024-01-20 18:00"
