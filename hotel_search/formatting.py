import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Union

from hotel_search.models import AnnotatedHotel, OrderBy, Page
from hotel_search.pricing import CurrencyFormatter

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"

DEFAULT_SEPARATOR = " &bull; "
LINE_BREAK_SEPARATOR = "<br/>"


@dataclass(frozen=True)
class Rendered:
    media_type: str
    payload: Union[Dict[str, Any], str]

    @property
    def body(self) -> str:
        if isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload, ensure_ascii=False)


def format_km(km: float) -> str:
    # 3.0 -> "3", 12.50 -> "12.5"
    return f"{km:.2f}".rstrip("0").rstrip(".")


def priced_only(hotels: Iterable[AnnotatedHotel]) -> Iterator[AnnotatedHotel]:
    """Drop hotels without a strictly positive price.

    Only the text list applies this; the JSON payload keeps every hotel.
    """
    return (h for h in hotels if h.price > 0)


def to_json(order_by: Union[OrderBy, str], page: Page) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"orderby": OrderBy.parse(order_by).value}
    if page.paginated:
        payload["page"] = page.page
        payload["pages"] = page.total_pages
    payload["data"] = [h.to_dict() for h in page.data]
    return payload


def format_line(hotel: AnnotatedHotel, formatter: CurrencyFormatter) -> str:
    return f"{hotel.name}, {format_km(hotel.distance_km)} KM, {formatter.format(hotel.price)}"


def to_list(
    hotels: Iterable[AnnotatedHotel],
    formatter: CurrencyFormatter,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    return separator.join(format_line(h, formatter) for h in priced_only(hotels))


def render_json(order_by: Union[OrderBy, str], page: Page) -> Rendered:
    return Rendered(media_type=JSON_MEDIA_TYPE, payload=to_json(order_by, page))


def render_list(
    page: Page,
    formatter: CurrencyFormatter,
    separator: str = DEFAULT_SEPARATOR,
) -> Rendered:
    return Rendered(media_type=TEXT_MEDIA_TYPE, payload=to_list(page.data, formatter, separator))
