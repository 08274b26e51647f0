"""UI state and fetch results - plain data, no I/O."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .events import EventCollection


class FetchStatus(Enum):
    """How a backend call ended."""

    OK = "ok"
    NETWORK_FAILURE = "network_failure"
    DECODE_FAILURE = "decode_failure"


class Phase(Enum):
    """Lifecycle of the event list."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one backend call.

    `stale` marks a response that arrived after a newer request was issued;
    it was dropped without touching state.
    """

    status: FetchStatus
    value: Any = None
    error: str | None = None
    seq: int = 0
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK


@dataclass
class UiState:
    """Everything the explorer shows. Owned by FetchCoordinator."""

    categories: list[str] = field(default_factory=list)
    selected_category: str = ""
    query: str = ""
    collection: EventCollection = field(default_factory=EventCollection.empty)
    loading: bool = False
    request_seq: int = 0
    phase: Phase = Phase.IDLE
    last_error: FetchResult | None = None
