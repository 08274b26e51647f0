"""Pure section assembly - turns a collection into renderable sections."""

from dataclasses import dataclass
from datetime import datetime

from .events import (
    STATUS_ORDER,
    Event,
    EventCollection,
    RegistrationStatus,
    reconcile,
)
from .filtering import filter_collection

SECTION_TITLES = {
    RegistrationStatus.OPEN: "Registration Open",
    RegistrationStatus.UPCOMING: "Opening Soon",
    RegistrationStatus.CLOSED: "Closed",
}


@dataclass(frozen=True)
class EventCard:
    """One event as it should be shown, with its actions resolved."""

    event: Event
    status: RegistrationStatus

    @property
    def key(self) -> str:
        return self.event.id

    @property
    def status_label(self) -> str:
        return self.status.label

    @property
    def register_url(self) -> str | None:
        """Registration link, offered only while registration is not closed."""
        if self.status is RegistrationStatus.CLOSED:
            return None
        return self.event.google_form_url

    @property
    def poster_url(self) -> str | None:
        return self.event.poster_url

    def format_when(self) -> str:
        """Event time range for display."""
        start = self.event.event_start.strftime("%Y-%m-%d %H:%M")
        if not self.event.event_end:
            return start
        return f"{start} → {self.event.event_end.strftime('%Y-%m-%d %H:%M')}"


@dataclass(frozen=True)
class Section:
    """A titled, non-empty group of cards sharing one status."""

    status: RegistrationStatus
    title: str
    cards: tuple[EventCard, ...]


def build_sections(
    collection: EventCollection,
    query: str,
    now: datetime,
) -> list[Section]:
    """
    Assemble sections in Open, Upcoming, Closed order.

    Pure function - no I/O. Buckets are reconciled against `now`, narrowed
    by the query, and dropped when nothing is left in them. Each event is
    classified once per call, so its label and Register action agree.
    """
    visible = filter_collection(reconcile(collection, now), query)

    sections = []
    for status in STATUS_ORDER:
        events = visible.bucket(status)
        if not events:
            continue
        sections.append(
            Section(
                status=status,
                title=SECTION_TITLES[status],
                cards=tuple(EventCard(event=e, status=status) for e in events),
            )
        )
    return sections
