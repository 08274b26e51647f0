"""HTTP events backend adapter."""

import logging

import requests

from event_explorer.config import Config, load_config
from event_explorer.core.events import EventCollection, parse_categories
from event_explorer.errors import DecodeFailure, NetworkFailure

logger = logging.getLogger(__name__)


class HttpEventBackend:
    """
    Events backend over HTTP.

    Implements EventBackend protocol. Translates transport and decoding
    problems into NetworkFailure / DecodeFailure. No business logic - just I/O.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        config: Config | None = None,
        session: requests.Session | None = None,
    ):
        if base_url is None or timeout is None:
            config = config or load_config()
        self.base_url = (base_url if base_url is not None else config.backend_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.request_timeout
        self._session = session or requests.Session()

    def _get_json(self, endpoint: str, params: dict | None = None):
        """GET an endpoint and decode its JSON body."""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"GET {url} params={params}")
        try:
            resp = self._session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise NetworkFailure(f"GET {endpoint} failed: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeFailure(f"GET {endpoint} returned invalid JSON: {e}") from e

    def fetch_categories(self) -> list[str]:
        """Fetch the distinct category names."""
        data = self._get_json("/events/categories")
        try:
            return parse_categories(data)
        except ValueError as e:
            raise DecodeFailure(f"Bad categories response: {e}") from e

    def fetch_events(self, category: str = "") -> EventCollection:
        """Fetch events sorted by time, optionally restricted to one category."""
        params = {}
        if category:
            params["category"] = category
        params["sort"] = "time"

        data = self._get_json("/events", params=params)
        try:
            collection = EventCollection.from_api(data)
        except ValueError as e:
            raise DecodeFailure(f"Bad events response: {e}") from e

        logger.info(
            f"Fetched {len(collection.all_events())} events "
            f"(category={category or 'all'}, count={collection.count})"
        )
        return collection

    def close(self) -> None:
        self._session.close()
