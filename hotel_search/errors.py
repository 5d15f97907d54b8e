from enum import Enum


class ErrorCode(str, Enum):
    INTERNAL = "internal"
    VALIDATION = "validation"
    DATA_SOURCE = "data_source"
    FETCH = "fetch"
    FORMATTER = "formatter"


class HotelSearchError(Exception):
    """Base class for every error raised by the search pipeline.

    Callers (CLI, HTTP service) catch this and show ``message`` to the user;
    ``code`` lets them pick a status without matching on the text.
    """

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HotelSearchError):
    code = ErrorCode.VALIDATION

    @classmethod
    def required(cls, field: str) -> "ValidationError":
        return cls(f"{field} is required")


class DataSourceError(HotelSearchError):
    code = ErrorCode.DATA_SOURCE

    def __init__(self, message: str = "No data found"):
        super().__init__(message)


class FetchError(HotelSearchError):
    code = ErrorCode.FETCH


class FormatterError(HotelSearchError):
    code = ErrorCode.FORMATTER

    def __init__(self, message: str = "Formatter error"):
        super().__init__(message)
