from .base import HotelSource
from .static_feed import StaticFeedClient
from .feed_api import HotelFeedClient

__all__ = ["HotelSource", "StaticFeedClient", "HotelFeedClient"]
