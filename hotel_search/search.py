import logging
from typing import Iterable, Iterator, Optional

from hotel_search.clients.base import HotelSource
from hotel_search.errors import ValidationError
from hotel_search.formatting import DEFAULT_SEPARATOR, Rendered, render_json, render_list
from hotel_search.geo import distance_km
from hotel_search.models import AnnotatedHotel, OrderBy, OutputFormat, Query, RawHotelRecord
from hotel_search.pricing import CurrencyFormatter
from hotel_search.ranking import paginate, rank
from hotel_search.sources import SourceRegistry

logger = logging.getLogger(__name__)


def annotate(
    latitude: float,
    longitude: float,
    records: Iterable[RawHotelRecord],
) -> Iterator[AnnotatedHotel]:
    """Lazily attach the distance in km from (latitude, longitude)."""
    for r in records:
        yield AnnotatedHotel(
            name=r.name,
            distance_km=distance_km(latitude, longitude, r.latitude, r.longitude),
            price=r.price_per_night,
        )


class SearchService:
    """Runs one nearby-hotel query end to end.

    - Validate the coordinates.
    - Resolve the source (per-query additions/selection never change
      ``self.registry``).
    - Fetch raw records through the feed client (cached).
    - Annotate with distance, rank, paginate.
    - Render as JSON payload or text list.
    """

    def __init__(
        self,
        client: HotelSource,
        registry: Optional[SourceRegistry] = None,
        formatter: Optional[CurrencyFormatter] = None,
        list_separator: str = DEFAULT_SEPARATOR,
    ):
        self.client = client
        self.registry = registry if registry is not None else SourceRegistry()
        self.formatter = formatter if formatter is not None else CurrencyFormatter()
        self.list_separator = list_separator

    def resolve_registry(self, query: Query) -> SourceRegistry:
        registry = self.registry
        if query.extra_sources:
            registry = registry.add_sources(query.extra_sources)
        if query.source:
            registry = registry.select_source(query.source)
        return registry

    def search(self, query: Query) -> Rendered:
        if query.latitude is None:
            raise ValidationError.required("Latitude")
        if query.longitude is None:
            raise ValidationError.required("Longitude")

        order_by = OrderBy.parse(query.order_by)
        output_format = OutputFormat.parse(query.output_format)

        registry = self.resolve_registry(query)
        logger.debug(
            "Searching near (%s, %s) order=%s source=%s",
            query.latitude, query.longitude, order_by.value, registry.selected,
        )

        records = self.client.fetch(order_by.value, registry)
        logger.info("Fetched %d hotels from %s", len(records), registry.selected)

        hotels = annotate(float(query.latitude), float(query.longitude), records)
        ranked = rank(order_by, hotels)
        page = paginate(query.page, query.page_size, ranked)

        if output_format == OutputFormat.JSON:
            return render_json(order_by, page)
        return render_list(page, self.formatter, self.list_separator)
