from typing import List, Optional

from showbook.core.exceptions import DuplicateShowError
from showbook.schemas.booking import BookingResponse
from showbook.schemas.show import ShowResponse
from showbook.storage.base import Storage


class MemoryStorage(Storage):
    """Keeps shows and bookings in two lists for the lifetime of the process.

    Everything going in or out is a deep copy, so callers never hold stored objects.
    """

    def __init__(self):
        self.shows: List[ShowResponse] = []
        self.bookings: List[BookingResponse] = []

    async def create_show(self, show: ShowResponse) -> ShowResponse:
        if self._find_show(show.id) is not None:
            raise DuplicateShowError(show.id)
        self.shows.append(show.model_copy(deep=True))
        return show

    async def get_show(self, show_id: str) -> Optional[ShowResponse]:
        show = self._find_show(show_id)
        return show.model_copy(deep=True) if show is not None else None

    async def list_shows(self) -> List[ShowResponse]:
        return [show.model_copy(deep=True) for show in self.shows]

    async def create_booking(self, booking: BookingResponse) -> BookingResponse:
        self.bookings.append(booking.model_copy(deep=True))
        return booking

    async def list_bookings(self, show_id: Optional[str] = None) -> List[BookingResponse]:
        return [
            booking.model_copy(deep=True)
            for booking in self.bookings
            if show_id is None or booking.show_id == show_id
        ]

    async def reset(self, shows: List[ShowResponse]) -> None:
        self.shows = [show.model_copy(deep=True) for show in shows]
        self.bookings = []

    def _find_show(self, show_id: str) -> Optional[ShowResponse]:
        return next((show for show in self.shows if show.id == show_id), None)
