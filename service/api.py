from functools import lru_cache
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, Query as QueryParam, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from hotel_search.cli import parse_source_pairs
from hotel_search.config import build_search_service
from hotel_search.errors import ErrorCode, HotelSearchError
from hotel_search.models import OrderBy, OutputFormat, Query
from hotel_search.search import SearchService


app = FastAPI(title="Nearby Hotel Search API", version="1.0.0")


class ErrorResponse(BaseModel):
    error: str
    detail: str


class HealthResponse(BaseModel):
    status: str


STATUS_BY_CODE: Dict[ErrorCode, int] = {
    ErrorCode.VALIDATION: 422,
    ErrorCode.DATA_SOURCE: 404,
    ErrorCode.FETCH: 502,
    ErrorCode.FORMATTER: 500,
    ErrorCode.INTERNAL: 500,
}


@lru_cache()
def get_search_service() -> SearchService:
    # One service (and so one response cache) per process
    return build_search_service()


@app.exception_handler(HotelSearchError)
async def search_error_handler(request: Request, exc: HotelSearchError):
    return JSONResponse(
        status_code=STATUS_BY_CODE.get(exc.code, 500),
        content=jsonable_encoder(ErrorResponse(error=exc.code.value, detail=exc.message)),
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok"}


@app.get(
    "/search",
    responses={422: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def search(
    latitude: Optional[float] = QueryParam(None, description="Query latitude"),
    longitude: Optional[float] = QueryParam(None, description="Query longitude"),
    orderby: str = QueryParam(OrderBy.PROXIMITY.value, description="proximity or pricepernight"),
    page: int = QueryParam(0, ge=0, description="1-based page; 0 disables paging"),
    limit: int = QueryParam(0, ge=0, description="Hotels per page; 0 disables paging"),
    format: str = QueryParam(OutputFormat.LIST.value, description="list or json"),
    source: Optional[str] = QueryParam(None, description="Source name to query"),
    add_source: Optional[List[str]] = QueryParam(
        None,
        description="Extra source as name=url, repeatable",
    ),
    service: SearchService = Depends(get_search_service),
):
    """Hotels near (latitude, longitude), as a text list or JSON payload.

    Missing coordinates are reported through the search error handler so
    the message matches the CLI ("Latitude is required").
    """
    rendered = service.search(
        Query(
            latitude=latitude,
            longitude=longitude,
            order_by=OrderBy.parse(orderby),
            page=page,
            page_size=limit,
            output_format=OutputFormat.parse(format),
            source=source,
            extra_sources=parse_source_pairs(add_source),
        )
    )
    return Response(content=rendered.body, media_type=rendered.media_type)


def run():
    """Entry point for `hotel-search-api` console script."""
    import uvicorn

    uvicorn.run("service.api:app", host="0.0.0.0", port=8000, reload=False)
