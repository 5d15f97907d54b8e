import math
from typing import Callable, Dict, Iterable, List, Optional, Union

from hotel_search.models import AnnotatedHotel, OrderBy, Page

SORT_KEYS: Dict[OrderBy, Callable[[AnnotatedHotel], float]] = {
    OrderBy.PROXIMITY: lambda h: h.distance_km,
    OrderBy.PRICE_PER_NIGHT: lambda h: h.price,
}


def rank(
    order_by: Union[OrderBy, str, None],
    hotels: Iterable[AnnotatedHotel],
) -> List[AnnotatedHotel]:
    """Sort hotels ascending by distance or by price per night.

    Comparison is numeric and ``sorted`` is stable, so ties keep the order
    the feed returned them in. Unknown order values rank by proximity.
    """
    key = SORT_KEYS[OrderBy.parse(order_by)]
    return sorted(hotels, key=key)


def paginate(
    page: Optional[int],
    page_size: Optional[int],
    hotels: List[AnnotatedHotel],
) -> Page:
    """Slice one page out of ``hotels``.

    ``page`` is 1-based. A page or page size of 0 (or below) disables
    paging and the whole list comes back with no page numbers. Out of
    range pages are clamped to the first/last page.
    """
    if not page or not page_size or page <= 0 or page_size <= 0:
        return Page(data=list(hotels))

    total = len(hotels)
    total_pages = math.ceil(total / page_size)
    page = max(1, min(page, total_pages))
    offset = max(0, (page - 1) * page_size)

    return Page(
        data=hotels[offset:offset + page_size],
        page=page,
        total_pages=total_pages,
    )
