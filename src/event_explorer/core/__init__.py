"""Functional core - pure business logic with no I/O."""

from .clock import Clock, FixedClock, SystemClock
from .events import (
    Event,
    EventCollection,
    RegistrationStatus,
    classify,
    parse_categories,
    reconcile,
)
from .filtering import filter_collection, filter_text
from .grouping import EventCard, Section, build_sections
from .state import FetchResult, FetchStatus, Phase, UiState

__all__ = [
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    # Events
    "Event",
    "EventCollection",
    "RegistrationStatus",
    "classify",
    "parse_categories",
    "reconcile",
    # Filtering
    "filter_collection",
    "filter_text",
    # Grouping
    "EventCard",
    "Section",
    "build_sections",
    # State
    "FetchResult",
    "FetchStatus",
    "Phase",
    "UiState",
]
