"""Fetch coordination - owns UiState and decides which response wins."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from .core.clock import Clock, SystemClock
from .core.grouping import Section, build_sections
from .core.state import FetchResult, FetchStatus, Phase, UiState
from .errors import DecodeFailure, NetworkFailure
from .ports.event_backend import EventBackend

logger = logging.getLogger(__name__)

Listener = Callable[[UiState], None]


class FetchCoordinator:
    """
    Single owner of UiState.

    Every backend call is tagged with a sequence number; only the response
    to the most recently issued events request is applied, whatever order
    the responses come back in. Blocking backend calls run in worker
    threads so the event loop is never held up, and each is bounded by
    `timeout` seconds.
    """

    def __init__(
        self,
        backend: EventBackend,
        clock: Clock | None = None,
        timeout: float = 10.0,
        state: UiState | None = None,
    ):
        self.backend = backend
        self.clock = clock or SystemClock()
        self.timeout = timeout
        self.state = state or UiState()
        self._listeners: list[Listener] = []
        self._tasks: set[asyncio.Task] = set()
        self._events_task: asyncio.Task | None = None
        self._started = False
        self._closed = False

    async def __aenter__(self) -> "FetchCoordinator":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("FetchCoordinator is closed")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` with the state after every applied change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _call(self, fn, *args) -> FetchResult:
        """Run a blocking backend call off the loop and turn errors into a result."""
        try:
            value = await asyncio.wait_for(asyncio.to_thread(fn, *args), self.timeout)
        except asyncio.TimeoutError:
            return FetchResult(
                FetchStatus.NETWORK_FAILURE,
                error=f"Request timed out after {self.timeout}s",
            )
        except NetworkFailure as e:
            return FetchResult(FetchStatus.NETWORK_FAILURE, error=str(e))
        except DecodeFailure as e:
            return FetchResult(FetchStatus.DECODE_FAILURE, error=str(e))
        return FetchResult(FetchStatus.OK, value=value)

    async def start(self) -> None:
        """Load categories and the initial event list."""
        self._ensure_open()
        if self._started:
            raise RuntimeError("FetchCoordinator already started")
        self._started = True

        self.set_category(self.state.selected_category)
        await self.load_categories()
        await self._follow_events_load()

    async def _follow_events_load(self) -> None:
        """Wait for the latest events load, following any set_category that supersedes it."""
        while not self._closed:
            task = self._events_task
            try:
                await task
                return
            except asyncio.CancelledError:
                if asyncio.current_task().cancelling():
                    raise
                # Cancelled without a newer load to follow
                if task is self._events_task and not self._closed:
                    raise

    async def load_categories(self) -> FetchResult:
        """Fetch categories. On failure the current list is kept."""
        self._ensure_open()
        result = await self._call(self.backend.fetch_categories)
        if self._closed:
            return result

        if result.ok:
            self.state.categories = list(result.value)
            self._notify()
        else:
            logger.error(f"Failed to load categories ({result.status.value}): {result.error}")
        return result

    async def load_events(self, category: str | None = None) -> FetchResult:
        """
        Fetch the event collection for `category` (default: the selected one).

        The collection is replaced only if no newer request was issued while
        this one was in flight; otherwise the response is returned marked
        stale and state is left alone.
        """
        self._ensure_open()
        if category is not None:
            self.state.selected_category = category
        else:
            category = self.state.selected_category

        self.state.request_seq += 1
        seq = self.state.request_seq
        self.state.loading = True
        self.state.phase = Phase.LOADING
        self._notify()

        result = replace(await self._call(self.backend.fetch_events, category), seq=seq)

        if self._closed or seq != self.state.request_seq:
            logger.debug(
                f"Discarding stale events response #{seq} "
                f"(latest #{self.state.request_seq}, {result.status.value})"
            )
            return replace(result, stale=True)

        self.state.loading = False
        if result.ok:
            self.state.collection = result.value
            self.state.phase = Phase.READY
            self.state.last_error = None
        else:
            # Previous collection stays on screen
            self.state.phase = Phase.ERRORED
            self.state.last_error = result
            logger.error(f"Failed to load events ({result.status.value}): {result.error}")
        self._notify()
        return result

    def set_category(self, category: str) -> asyncio.Task:
        """Select a category and reload. Any in-flight events load is cancelled."""
        self._ensure_open()
        self.state.selected_category = category
        if self._events_task is not None and not self._events_task.done():
            self._events_task.cancel()
        self._events_task = self._spawn(self.load_events(category))
        return self._events_task

    def set_query(self, query: str) -> None:
        """Update the search text. Filtering is local; no request is made."""
        self._ensure_open()
        self.state.query = query
        self._notify()

    def sections(self) -> list[Section]:
        """Sections for the current state, classified at the clock's now."""
        return build_sections(self.state.collection, self.state.query, self.clock.now())

    def close(self) -> None:
        """Cancel in-flight work. No state changes after this."""
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()

    async def aclose(self) -> None:
        """Close and wait for cancelled tasks to unwind."""
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
