from hotel_search.errors import (
    DataSourceError,
    ErrorCode,
    FetchError,
    FormatterError,
    HotelSearchError,
    ValidationError,
)
from hotel_search.models import OrderBy, OutputFormat, Query
from hotel_search.search import SearchService

__version__ = "1.0.0"

__all__ = [
    "DataSourceError",
    "ErrorCode",
    "FetchError",
    "FormatterError",
    "HotelSearchError",
    "OrderBy",
    "OutputFormat",
    "Query",
    "SearchService",
    "ValidationError",
]
