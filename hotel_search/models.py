import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from hotel_search.errors import DataSourceError


class OrderBy(str, Enum):
    PROXIMITY = "proximity"
    PRICE_PER_NIGHT = "pricepernight"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OrderBy":
        """Lenient parse: "Price night", "price_per_night" etc. all map to
        PRICE_PER_NIGHT; anything unknown falls back to PROXIMITY."""
        if isinstance(value, OrderBy):
            return value
        if not value:
            return cls.PROXIMITY
        compact = re.sub(r"[\s_\-]", "", str(value)).lower()
        if compact in ("pricepernight", "pricenight", "price"):
            return cls.PRICE_PER_NIGHT
        return cls.PROXIMITY


class OutputFormat(str, Enum):
    LIST = "list"
    JSON = "json"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OutputFormat":
        if isinstance(value, OutputFormat):
            return value
        if value and str(value).strip().lower() == "json":
            return cls.JSON
        return cls.LIST


@dataclass(frozen=True)
class RawHotelRecord:
    name: str
    latitude: float
    longitude: float
    price_per_night: float

    @classmethod
    def from_row(cls, row: Any) -> "RawHotelRecord":
        """Build a record from a feed row ``[name, lat, lon, price]``.

        A short or non-numeric row means the feed is broken, so it raises
        DataSourceError instead of being skipped.
        """
        if not isinstance(row, (list, tuple)) or len(row) < 4:
            raise DataSourceError()
        name, lat, lon, price = row[0], row[1], row[2], row[3]
        if name is None or lat is None or lon is None or price is None:
            raise DataSourceError()
        try:
            lat, lon, price = float(lat), float(lon), float(price)
        except (TypeError, ValueError) as exc:
            raise DataSourceError() from exc
        # "nan" and "inf" convert cleanly but are not usable data
        if not all(map(math.isfinite, (lat, lon, price))):
            raise DataSourceError()
        return cls(name=str(name), latitude=lat, longitude=lon, price_per_night=price)

    def to_row(self) -> List[Any]:
        return [self.name, self.latitude, self.longitude, self.price_per_night]


@dataclass(frozen=True)
class AnnotatedHotel:
    name: str
    distance_km: float
    price: float

    def to_dict(self) -> Dict[str, Any]:
        return {"hotel": self.name, "km": self.distance_km, "price": self.price}


@dataclass
class Query:
    latitude: Optional[float]
    longitude: Optional[float]
    order_by: OrderBy = OrderBy.PROXIMITY
    page: int = 0               # 0 = unpaginated
    page_size: int = 0          # 0 = unpaginated
    output_format: OutputFormat = OutputFormat.LIST
    source: Optional[str] = None
    extra_sources: Optional[Dict[str, str]] = None


@dataclass
class Page:
    data: Sequence[AnnotatedHotel] = field(default_factory=list)
    # None when pagination was skipped
    page: Optional[int] = None
    total_pages: Optional[int] = None

    @property
    def paginated(self) -> bool:
        return self.page is not None
