"""Pure text filtering over event buckets."""

from collections.abc import Iterable

from .events import Event, EventCollection


def matches_query(event: Event, query: str) -> bool:
    """True if title, description or venue contains the query, ignoring case."""
    needle = query.casefold()
    return (
        needle in event.title.casefold()
        or needle in event.description.casefold()
        or needle in event.venue.casefold()
    )


def filter_text(events: Iterable[Event], query: str) -> list[Event]:
    """
    Keep events matching the query, in their original order.

    An empty query keeps everything.
    """
    if not query:
        return list(events)
    return [e for e in events if matches_query(e, query)]


def filter_collection(collection: EventCollection, query: str) -> EventCollection:
    """Apply `filter_text` to each bucket on its own."""
    return EventCollection(
        open=tuple(filter_text(collection.open, query)),
        upcoming=tuple(filter_text(collection.upcoming, query)),
        closed=tuple(filter_text(collection.closed, query)),
        count=collection.count,
    )
