"""
Storage interface the catalog and the booking allocator are written against.

Implementations own the records; callers only ever see ShowResponse and
BookingResponse values.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from showbook.schemas.booking import BookingResponse
from showbook.schemas.show import ShowResponse


class Storage(ABC):

    @abstractmethod
    async def create_show(self, show: ShowResponse) -> ShowResponse:
        """Persist a fully populated show. Raises DuplicateShowError on an id clash."""

    @abstractmethod
    async def get_show(self, show_id: str) -> Optional[ShowResponse]:
        pass

    @abstractmethod
    async def list_shows(self) -> List[ShowResponse]:
        """All shows in insertion order."""

    @abstractmethod
    async def create_booking(self, booking: BookingResponse) -> BookingResponse:
        """Persist a booking.

        Backends that can detect a double claim on a seat themselves raise
        SeatConflictError instead of storing it.
        """

    @abstractmethod
    async def list_bookings(self, show_id: Optional[str] = None) -> List[BookingResponse]:
        """Bookings in insertion order, optionally only those of one show."""

    @abstractmethod
    async def reset(self, shows: List[ShowResponse]) -> None:
        """Drop every booking and show, then store the given shows."""

    async def close(self) -> None:
        pass
