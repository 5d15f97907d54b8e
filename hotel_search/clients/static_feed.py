from typing import Dict, List, Optional, Sequence

from hotel_search.clients.base import HotelSource
from hotel_search.errors import DataSourceError, ValidationError
from hotel_search.models import RawHotelRecord
from hotel_search.sources import SourceRegistry


class StaticFeedClient(HotelSource):
    """Offline source used for development and testing.

    Serves fixed feed rows per source name instead of calling the network.
    """

    def __init__(self, rows_by_source: Dict[str, Sequence[Sequence]], name: str = "static_feed"):
        self.name = name
        self.rows_by_source = rows_by_source
        self.calls = 0

    def fetch(
        self,
        order_key: Optional[str],
        registry: Optional[SourceRegistry] = None,
    ) -> List[RawHotelRecord]:
        if not order_key:
            raise ValidationError.required("Order")

        self.calls += 1
        selected = registry.selected if registry is not None else next(iter(self.rows_by_source), None)
        rows = self.rows_by_source.get(selected)
        if rows is None:
            raise DataSourceError()
        return [RawHotelRecord.from_row(row) for row in rows]
