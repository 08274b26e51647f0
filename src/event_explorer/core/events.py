"""Pure event domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class RegistrationStatus(Enum):
    """Where `now` falls relative to an event's registration window."""

    OPEN = "open"
    UPCOMING = "upcoming"
    CLOSED = "closed"

    @property
    def label(self) -> str:
        """Badge text shown on an event card."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    RegistrationStatus.OPEN: "Registration Open",
    RegistrationStatus.UPCOMING: "Opens Soon",
    RegistrationStatus.CLOSED: "Closed",
}

# Bucket order used everywhere a collection is walked or rendered
STATUS_ORDER = (
    RegistrationStatus.OPEN,
    RegistrationStatus.UPCOMING,
    RegistrationStatus.CLOSED,
)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    A trailing "Z" is accepted; naive values are taken as UTC.
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected timestamp string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _bool_field(data: dict, key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be a boolean, got {value!r}")
    return value


@dataclass(frozen=True)
class Event:
    """A time-bounded event with a registration window."""

    id: str
    title: str
    description: str
    venue: str
    category: str
    registration_start: datetime
    registration_end: datetime
    event_start: datetime
    event_end: datetime | None = None
    poster_url: str | None = None
    google_form_url: str | None = None
    is_org_verified: bool = False

    def __post_init__(self):
        # Naive datetimes are UTC, same as parse_timestamp and FixedClock
        for name in ("registration_start", "registration_end", "event_start", "event_end"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=timezone.utc))
        if self.registration_start > self.registration_end:
            raise ValueError(
                f"Event {self.id}: registration_start is after registration_end"
            )

    @classmethod
    def from_api(cls, data: dict) -> "Event":
        """Create Event from a backend JSON object."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected event object, got {type(data).__name__}")
        try:
            event_end = data.get("event_end")
            return cls(
                id=str(data["id"]),
                title=str(data["title"] or ""),
                description=str(data.get("description") or ""),
                venue=str(data.get("venue") or ""),
                category=str(data.get("category") or ""),
                registration_start=parse_timestamp(data["registration_start"]),
                registration_end=parse_timestamp(data["registration_end"]),
                event_start=parse_timestamp(data["event_start"]),
                event_end=parse_timestamp(event_end) if event_end else None,
                poster_url=_optional_str(data, "poster_url"),
                google_form_url=_optional_str(data, "google_form_url"),
                is_org_verified=_bool_field(data, "is_org_verified"),
            )
        except KeyError as e:
            raise ValueError(f"Event is missing field {e}") from e


def classify(event: Event, now: datetime) -> RegistrationStatus:
    """
    Classify an event by its registration window.

    The window is closed at both ends: an event whose window starts and
    ends exactly at `now` is open.
    """
    if event.registration_start <= now <= event.registration_end:
        return RegistrationStatus.OPEN
    if now < event.registration_start:
        return RegistrationStatus.UPCOMING
    return RegistrationStatus.CLOSED


@dataclass(frozen=True)
class EventCollection:
    """Events partitioned into open/upcoming/closed buckets, each sorted by start."""

    open: tuple[Event, ...] = ()
    upcoming: tuple[Event, ...] = ()
    closed: tuple[Event, ...] = ()
    count: int = 0

    @classmethod
    def empty(cls) -> "EventCollection":
        return cls()

    @classmethod
    def from_buckets(
        cls,
        open_events: list[Event],
        upcoming_events: list[Event],
        closed_events: list[Event],
        count: int | None = None,
    ) -> "EventCollection":
        total = len(open_events) + len(upcoming_events) + len(closed_events)
        return cls(
            open=tuple(open_events),
            upcoming=tuple(upcoming_events),
            closed=tuple(closed_events),
            count=total if count is None else count,
        )

    @classmethod
    def from_api(cls, data: dict) -> "EventCollection":
        """Create EventCollection from the /events response body."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected object, got {type(data).__name__}")

        buckets: dict[str, list[Event]] = {}
        seen: set[str] = set()
        for status in STATUS_ORDER:
            raw = data.get(status.value)
            if raw is None:
                raw = []
            if not isinstance(raw, list):
                raise ValueError(f"'{status.value}' must be a list")
            events = [Event.from_api(item) for item in raw]
            for event in events:
                if event.id in seen:
                    raise ValueError(f"Event {event.id} appears in more than one bucket")
                seen.add(event.id)
            buckets[status.value] = events

        count = data.get("count")
        if count is not None and not isinstance(count, int):
            raise ValueError("'count' must be an integer")

        return cls.from_buckets(
            buckets["open"], buckets["upcoming"], buckets["closed"], count
        )

    def bucket(self, status: RegistrationStatus) -> tuple[Event, ...]:
        """The events in one bucket."""
        return getattr(self, status.value)

    def all_events(self) -> list[Event]:
        """All events, bucket by bucket."""
        return [*self.open, *self.upcoming, *self.closed]

    def is_empty(self) -> bool:
        return not (self.open or self.upcoming or self.closed)


def reconcile(collection: EventCollection, now: datetime) -> EventCollection:
    """
    Re-bucket a collection with `classify` at `now`.

    The backend partitions at the instant it answered; by render time an
    event may have crossed a window boundary. Buckets are rebuilt from the
    local status and kept in ascending event_start order. When the backend
    and `now` agree, every bucket comes back unchanged.
    """
    buckets: dict[RegistrationStatus, list[Event]] = {s: [] for s in STATUS_ORDER}
    for event in collection.all_events():
        buckets[classify(event, now)].append(event)

    return EventCollection(
        open=tuple(sort_events_by_start(buckets[RegistrationStatus.OPEN])),
        upcoming=tuple(sort_events_by_start(buckets[RegistrationStatus.UPCOMING])),
        closed=tuple(sort_events_by_start(buckets[RegistrationStatus.CLOSED])),
        count=collection.count,
    )


def sort_events_by_start(events: list[Event]) -> list[Event]:
    """Sort events by event_start. Stable, so ties keep their order."""
    return sorted(events, key=lambda e: e.event_start)


def parse_categories(data: list) -> list[str]:
    """Validate a /events/categories response and drop duplicates."""
    if not isinstance(data, list):
        raise ValueError(f"Expected list of categories, got {type(data).__name__}")
    categories: list[str] = []
    for item in data:
        if not isinstance(item, str):
            raise ValueError(f"Category must be a string, got {item!r}")
        if item not in categories:
            categories.append(item)
    return categories
