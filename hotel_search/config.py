import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from hotel_search.cache import DEFAULT_TTL_SECONDS, ResponseCache
from hotel_search.clients.feed_api import HotelFeedClient
from hotel_search.formatting import DEFAULT_SEPARATOR
from hotel_search.pricing import CurrencyFormatter
from hotel_search.search import SearchService
from hotel_search.sources import DEFAULT_SOURCE, DEFAULT_SOURCES, SourceRegistry

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = ROOT / "config" / "search.yaml"

CONFIG_ENV = "HOTEL_SEARCH_CONFIG"
SOURCE_ENV = "HOTEL_SEARCH_SOURCE"


@dataclass(frozen=True)
class SearchConfig:
    sources: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SOURCES))
    selected_source: str = DEFAULT_SOURCE
    cache_ttl_seconds: int = DEFAULT_TTL_SECONDS
    timeout_seconds: float = 10.0
    currency_locale: str = "pt"
    currency_code: str = "EUR"
    show_currency_symbol: bool = False
    list_separator: str = DEFAULT_SEPARATOR

    def registry(self) -> SourceRegistry:
        base = SourceRegistry(endpoints={}, selected=self.selected_source)
        registry = base.add_sources(self.sources) if self.sources else base
        if registry.selected not in registry:
            fallback = next(iter(registry.endpoints), None)
            if fallback is None:
                registry = SourceRegistry()
            else:
                logger.warning(
                    "Configured source %r is unknown, using %r",
                    self.selected_source,
                    fallback,
                )
                registry = registry.select_source(fallback)
        return registry

    def currency_formatter(self) -> CurrencyFormatter:
        return CurrencyFormatter(
            locale=self.currency_locale,
            currency=self.currency_code,
            show_symbol=self.show_currency_symbol,
        )


def load_search_config(path: Optional[Union[str, Path]] = None) -> SearchConfig:
    """Load config/search.yaml, falling back to defaults for anything missing.

    ``.env`` is read first; HOTEL_SEARCH_CONFIG points at another file and
    HOTEL_SEARCH_SOURCE overrides the selected source.
    """
    load_dotenv()

    if path is None:
        path = os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH
    path = Path(path)

    raw: dict = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    else:
        logger.debug("Config file %s not found, using defaults", path)

    cache_cfg = raw.get("cache", {}) or {}
    http_cfg = raw.get("http", {}) or {}
    currency_cfg = raw.get("currency", {}) or {}

    sources = raw.get("sources") or dict(DEFAULT_SOURCES)
    selected = os.environ.get(SOURCE_ENV) or raw.get("selected_source", DEFAULT_SOURCE)

    return SearchConfig(
        sources={str(k): str(v) for k, v in sources.items()},
        selected_source=str(selected),
        cache_ttl_seconds=int(cache_cfg.get("ttl_seconds", DEFAULT_TTL_SECONDS)),
        timeout_seconds=float(http_cfg.get("timeout_seconds", 10)),
        currency_locale=str(currency_cfg.get("locale", "pt")),
        currency_code=str(currency_cfg.get("code", "EUR")),
        show_currency_symbol=bool(currency_cfg.get("show_symbol", False)),
        list_separator=str(raw.get("list_separator", DEFAULT_SEPARATOR)),
    )


def build_search_service(
    config: Optional[SearchConfig] = None,
    cache: Optional[ResponseCache] = None,
) -> SearchService:
    if config is None:
        config = load_search_config()

    if cache is None:
        cache = ResponseCache(ttl_seconds=config.cache_ttl_seconds)

    registry = config.registry()
    client = HotelFeedClient(
        registry=registry,
        cache=cache,
        timeout_seconds=config.timeout_seconds,
    )
    return SearchService(
        client=client,
        registry=registry,
        formatter=config.currency_formatter(),
        list_separator=config.list_separator,
    )
