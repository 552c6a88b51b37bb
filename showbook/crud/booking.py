import logging
from typing import List, Optional, Set
from uuid import uuid4

from showbook.core.config import get_settings
from showbook.core.exceptions import InvalidReferenceError, InvalidSeatRangeError, SeatConflictError
from showbook.core.locks import ShowLocks
from showbook.models import utcnow
from showbook.models.booking import BookingStatus
from showbook.schemas.booking import BookingCreate, BookingResponse
from showbook.schemas.show import ShowResponse
from showbook.storage.base import Storage


logger = logging.getLogger(__name__)

DEFAULT_BOOKING_NAME = "Guest"


class CRUDBooking:
    def __init__(self, reject_seats_without_seat_model: Optional[bool] = None):
        if reject_seats_without_seat_model is None:
            reject_seats_without_seat_model = get_settings().REJECT_SEATS_WITHOUT_SEAT_MODEL
        self.reject_seats_without_seat_model = reject_seats_without_seat_model

    async def list_bookings(self, storage: Storage, show_id: Optional[str] = None) -> List[BookingResponse]:
        bookings = await storage.list_bookings(show_id)
        # newest first; reverse sort keeps ties in insertion order
        return sorted(bookings, key=lambda booking: booking.created_at, reverse=True)

    async def taken_seats(self, storage: Storage, show_id: str) -> Set[int]:
        taken = set()
        for booking in await storage.list_bookings(show_id):
            taken.update(booking.seats)
        return taken

   # .1 the show must exist.
   # .2 shows without a seat model skip range and conflict checks; their bookings carry no seats.
   # .3 every seat must lie in [1, total_seats]; cheap, so it runs before taking the lock.
   # .4 under the show lock: collect taken seats, reject any overlap, append the booking.

    async def request_booking(self, storage: Storage, show_locks: ShowLocks, data: BookingCreate) -> BookingResponse:
        show = await storage.get_show(data.show_id)
        if show is None:
            logger.info("booking rejected: show %s does not exist", data.show_id)
            raise InvalidReferenceError(data.show_id)

        seats = sorted(set(data.seats))

        if show.total_seats is None:
            if seats and self.reject_seats_without_seat_model:
                raise InvalidSeatRangeError(f"Show {show.id} has no seats to book", seats)
            return await storage.create_booking(self._new_booking(show, [], data))

        if not seats:
            raise InvalidSeatRangeError("At least one seat must be requested")
        out_of_range = [seat for seat in seats if seat < 1 or seat > show.total_seats]
        if out_of_range:
            logger.info("booking rejected: seats %s outside 1-%s for show %s",
                        out_of_range, show.total_seats, show.id)
            raise InvalidSeatRangeError.out_of_range(out_of_range, show.total_seats)

        async with show_locks.hold(show.id):
            taken = await self.taken_seats(storage, show.id)
            conflicting = [seat for seat in seats if seat in taken]
            if conflicting:
                logger.info("booking rejected: seats %s already taken for show %s", conflicting, show.id)
                raise SeatConflictError(conflicting)
            booking = await storage.create_booking(self._new_booking(show, seats, data))

        logger.info("booking %s confirmed for show %s, seats %s", booking.id, show.id, booking.seats)
        return booking

    @staticmethod
    def _new_booking(show: ShowResponse, seats: List[int], data: BookingCreate) -> BookingResponse:
        return BookingResponse(
            id=str(uuid4()),
            show_id=show.id,
            seats=seats,
            name=data.name or DEFAULT_BOOKING_NAME,
            email=data.email,
            status=BookingStatus.CONFIRMED,
            created_at=utcnow(),
        )


crud_booking = CRUDBooking()
