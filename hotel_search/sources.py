import logging
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional
from urllib.parse import urlparse

from hotel_search.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: Dict[str, str] = {
    "source_1": "https://xlr8-interview-files.s3.eu-west-2.amazonaws.com/source_1.json",
    "source_2": "https://xlr8-interview-files.s3.eu-west-2.amazonaws.com/source_2.json",
}
DEFAULT_SOURCE = "source_1"

NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")


def _is_numeric(value) -> bool:
    return bool(NUMERIC_RE.match(str(value)))


def is_valid_url(value: str) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class SourceRegistry:
    """Named feed endpoints plus the currently selected one.

    The registry never changes in place: ``add_sources`` and
    ``select_source`` return a new registry, so a query can extend or
    switch sources without touching the one held by the service.
    """

    endpoints: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_SOURCES))
    )
    selected: str = DEFAULT_SOURCE

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoints", MappingProxyType(dict(self.endpoints)))

    def add_sources(self, sources: Optional[Mapping[str, str]]) -> "SourceRegistry":
        """Return a registry with every valid entry of ``sources`` merged in.

        Entries with a numeric name, an empty value or a malformed URL are
        dropped without error. An empty or missing mapping is an error.
        """
        if not sources:
            raise ValidationError.required("Sources list")

        valid: Dict[str, str] = {}
        for name, url in sources.items():
            if _is_numeric(name):
                logger.debug("Dropping source with numeric name: %r", name)
                continue
            if not url or not is_valid_url(url):
                logger.debug("Dropping source %r with invalid url: %r", name, url)
                continue
            valid[str(name)] = url.strip()

        if not valid:
            return self

        merged = dict(self.endpoints)
        merged.update(valid)
        return replace(self, endpoints=merged)

    def select_source(self, name: Optional[str]) -> "SourceRegistry":
        """Switch the active source; unknown names leave it unchanged."""
        if not name or name not in self.endpoints:
            logger.debug("Ignoring unknown source selection: %r", name)
            return self
        return replace(self, selected=name)

    def resolve_active_endpoint(self) -> str:
        return self.endpoints[self.selected]

    def __contains__(self, name: object) -> bool:
        return name in self.endpoints

    def __len__(self) -> int:
        return len(self.endpoints)
