"""Tests for text filtering."""

import pytest

from event_explorer.core.events import EventCollection
from event_explorer.core.filtering import filter_collection, filter_text, matches_query


@pytest.fixture
def events(make_event):
    return [
        make_event(title="Jazz Night", venue="Blue Room"),
        make_event(title="Rock Fest", venue="Stadium"),
        make_event(title="all-JAZZ fest", venue="Park"),
    ]


class TestFilterText:
    def test_case_insensitive_title_match(self, events):
        result = filter_text(events, "jazz")
        assert [e.title for e in result] == ["Jazz Night", "all-JAZZ fest"]

    def test_query_case_does_not_matter(self, events):
        assert filter_text(events, "JaZz") == filter_text(events, "jazz")

    def test_empty_query_is_identity(self, events):
        assert filter_text(events, "") == events

    def test_returns_new_list(self, events):
        assert filter_text(events, "") is not events

    def test_idempotent(self, events):
        once = filter_text(events, "fest")
        assert filter_text(once, "fest") == once

    def test_preserves_order(self, make_event):
        items = [make_event(title=f"Talk {i}") for i in range(5)]
        kept = filter_text(items, "talk")
        assert kept == items

    def test_matches_description(self, make_event):
        event = make_event(title="Evening", description="Smooth SAXOPHONE set")
        assert filter_text([event], "saxophone") == [event]

    def test_matches_venue(self, make_event):
        event = make_event(title="Evening", venue="The Blue Note")
        assert filter_text([event], "blue note") == [event]

    def test_ignores_category(self, make_event):
        event = make_event(title="Evening", category="jazz")
        assert filter_text([event], "jazz") == []

    def test_no_match(self, events):
        assert filter_text(events, "opera") == []

    def test_accepts_tuple(self, events):
        assert filter_text(tuple(events), "rock") == [events[1]]


class TestMatchesQuery:
    def test_substring(self, make_event):
        assert matches_query(make_event(title="Hackathon"), "hack") is True

    def test_casefold(self, make_event):
        assert matches_query(make_event(title="STRASSE Party"), "straße") is True


class TestFilterCollection:
    def test_filters_each_bucket_independently(self, make_event):
        collection = EventCollection.from_buckets(
            [make_event(title="Jazz A"), make_event(title="Rock A")],
            [make_event(title="Rock B")],
            [make_event(title="Jazz C")],
        )

        result = filter_collection(collection, "jazz")

        assert [e.title for e in result.open] == ["Jazz A"]
        assert result.upcoming == ()
        assert [e.title for e in result.closed] == ["Jazz C"]

    def test_empty_query_keeps_collection(self, make_event):
        collection = EventCollection.from_buckets([make_event()], [make_event()], [])
        assert filter_collection(collection, "") == collection
