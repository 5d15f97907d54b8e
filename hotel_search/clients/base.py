from abc import ABC, abstractmethod
from typing import List, Optional

from hotel_search.models import RawHotelRecord
from hotel_search.sources import SourceRegistry


class HotelSource(ABC):
    name: str

    @abstractmethod
    def fetch(
        self,
        order_key: Optional[str],
        registry: Optional[SourceRegistry] = None,
    ) -> List[RawHotelRecord]:
        """Return every hotel record served by the active source."""
        raise NotImplementedError
