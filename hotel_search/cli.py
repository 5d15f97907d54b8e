import argparse
import logging
import sys
from typing import Dict, List, Optional

from hotel_search.config import build_search_service, load_search_config
from hotel_search.errors import HotelSearchError
from hotel_search.models import OrderBy, OutputFormat, Query


def parse_source_pairs(pairs: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Turn ["name=url", ...] into a mapping; pairs without "=" are skipped."""
    if not pairs:
        return None
    sources: Dict[str, str] = {}
    for pair in pairs:
        name, sep, url = pair.partition("=")
        if not sep:
            continue
        sources[name.strip()] = url.strip()
    return sources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Nearby hotel search – hotels around a coordinate, by proximity or price"
    )
    parser.add_argument("--lat", type=float, default=None, help="query latitude")
    parser.add_argument("--lon", type=float, default=None, help="query longitude")
    parser.add_argument(
        "--order-by",
        default=OrderBy.PROXIMITY.value,
        help="proximity (default) or pricepernight",
    )
    parser.add_argument("--page", type=int, default=0,
                        help="1-based page number; 0 returns every hotel")
    parser.add_argument("--limit", type=int, default=0,
                        help="hotels per page; 0 returns every hotel")
    parser.add_argument("--json", action="store_true",
                        help="print the JSON payload instead of the text list")
    parser.add_argument("--source", default=None, help="name of the source to query")
    parser.add_argument(
        "--add-source",
        action="append",
        default=None,
        metavar="NAME=URL",
        help="register an extra source for this query (repeatable)",
    )
    parser.add_argument("--config", default=None,
                        help="path to search.yaml (default: config/search.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = build_search_service(load_search_config(args.config))
    query = Query(
        latitude=args.lat,
        longitude=args.lon,
        order_by=OrderBy.parse(args.order_by),
        page=args.page,
        page_size=args.limit,
        output_format=OutputFormat.JSON if args.json else OutputFormat.LIST,
        source=args.source,
        extra_sources=parse_source_pairs(args.add_source),
    )

    try:
        rendered = service.search(query)
    except HotelSearchError as exc:
        print(exc.message)
        return 1

    print(rendered.body)
    return 0


if __name__ == "__main__":
    sys.exit(main())
