"""Event backend interface."""

from typing import Protocol

from event_explorer.core.events import EventCollection


class EventBackend(Protocol):
    """Interface for the read-only events backend.

    Implementations raise NetworkFailure or DecodeFailure on error.
    """

    def fetch_categories(self) -> list[str]:
        """Fetch the distinct category names."""
        ...

    def fetch_events(self, category: str = "") -> EventCollection:
        """Fetch events, optionally restricted to one category."""
        ...
