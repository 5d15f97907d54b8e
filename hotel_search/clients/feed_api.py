import logging
from typing import Any, List, Optional

import requests

from hotel_search.cache import ResponseCache
from hotel_search.clients.base import HotelSource
from hotel_search.errors import DataSourceError, FetchError, ValidationError
from hotel_search.models import RawHotelRecord
from hotel_search.sources import SourceRegistry

logger = logging.getLogger(__name__)


class HotelFeedClient(HotelSource):
    """HTTP client for the JSON hotel feed with in-memory caching.

    The feed answers a plain GET with::

        {"success": true, "message": [[name, lat, lon, price], ...]}

    Caching:
    - Parsed records are stored in ResponseCache keyed by
      (source name, endpoint url, order key).
    - Nothing is cached when the fetch fails.
    """

    def __init__(
        self,
        registry: Optional[SourceRegistry] = None,
        cache: Optional[ResponseCache] = None,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 10,
        name: str = "hotel_feed",
        cache_enabled: bool = True,
    ):
        self.name = name
        self.registry = registry if registry is not None else SourceRegistry()
        self.cache = cache
        self.session = session if session is not None else requests.Session()
        self.timeout_seconds = timeout_seconds
        self.cache_enabled = cache_enabled

    def _cache_key(self, registry: SourceRegistry, order_key: str) -> str:
        return (
            f"{registry.selected}|"
            f"url={registry.resolve_active_endpoint()}|"
            f"order={order_key}"
        )

    def fetch(
        self,
        order_key: Optional[str],
        registry: Optional[SourceRegistry] = None,
    ) -> List[RawHotelRecord]:
        if not order_key:
            raise ValidationError.required("Order")

        registry = registry if registry is not None else self.registry
        use_cache = self.cache_enabled and self.cache is not None

        cache_key = self._cache_key(registry, str(order_key))
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("[%s] cache hit for %s", self.name, cache_key)
                return list(cached)

        url = registry.resolve_active_endpoint()
        logger.info("[%s] fetching hotels from %s (%s)", self.name, registry.selected, url)
        data = self._get_json(url)
        records = self._parse(data)

        if use_cache:
            self.cache.set(cache_key, tuple(records))
        return records

    def _get_json(self, url: str) -> Any:
        try:
            resp = self.session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("[%s] HTTP error for %s: %s", self.name, url, exc)
            raise FetchError(str(exc)) from exc

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("[%s] Non-JSON response from %s", self.name, url)
            raise DataSourceError() from exc

    def _parse(self, data: Any) -> List[RawHotelRecord]:
        if not isinstance(data, dict) or not data.get("success"):
            raise DataSourceError()

        rows = data.get("message")
        if not isinstance(rows, list):
            raise DataSourceError()

        return [RawHotelRecord.from_row(row) for row in rows]
