import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlalchemy.sql import select

from showbook.core.exceptions import DuplicateShowError, SeatConflictError
from showbook.models.booking import Booking
from showbook.models.booking_seat import BookingSeat
from showbook.models.show import Show
from showbook.schemas.booking import BookingResponse
from showbook.schemas.show import ShowResponse
from showbook.storage.base import Storage


logger = logging.getLogger(__name__)


def _to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        show_id=booking.show_id,
        seats=[booking_seat.seat_number for booking_seat in booking.seats],
        name=booking.name,
        email=booking.email,
        status=booking.status,
        created_at=booking.created_at,
    )


class DatabaseStorage(Storage):
    """Shows and bookings in a relational database, one session per call.

    Each seat of a booking is its own bookingseat row, and the unique
    (show_id, seat_number) constraint on that table is what finally decides
    a race between two processes claiming the same seat.
    """

    def __init__(self, session_factory: async_sessionmaker, engine: Optional[AsyncEngine] = None):
        self.session_factory = session_factory
        self.engine = engine

    async def create_show(self, show: ShowResponse) -> ShowResponse:
        async with self.session_factory() as db:
            new_show = Show(**show.model_dump())
            db.add(new_show)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise DuplicateShowError(show.id)
            return ShowResponse.model_validate(new_show)

    async def get_show(self, show_id: str) -> Optional[ShowResponse]:
        async with self.session_factory() as db:
            show = await db.get(Show, show_id)
            if show is None:
                return None
            return ShowResponse.model_validate(show)

    async def list_shows(self) -> List[ShowResponse]:
        async with self.session_factory() as db:
            result = await db.scalars(select(Show).order_by(Show.created_at, Show.id))
            return [ShowResponse.model_validate(show) for show in result.all()]

    async def create_booking(self, booking: BookingResponse) -> BookingResponse:
        async with self.session_factory() as db:
            new_booking = Booking(
                id=booking.id,
                show_id=booking.show_id,
                name=booking.name,
                email=booking.email,
                status=booking.status,
                created_at=booking.created_at,
                seats=[BookingSeat(show_id=booking.show_id, seat_number=seat) for seat in booking.seats],
            )
            db.add(new_booking)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                taken = await db.scalars(
                    select(BookingSeat.seat_number)
                    .where(BookingSeat.show_id == booking.show_id)
                    .where(BookingSeat.seat_number.in_(booking.seats))
                )
                conflicting = sorted(taken.all())
                if not conflicting:
                    raise
                logger.warning("seat constraint rejected booking for show %s, seats %s",
                               booking.show_id, conflicting)
                raise SeatConflictError(conflicting)
            return booking

    async def list_bookings(self, show_id: Optional[str] = None) -> List[BookingResponse]:
        async with self.session_factory() as db:
            stmt = select(Booking).order_by(Booking.created_at)
            if show_id is not None:
                stmt = stmt.where(Booking.show_id == show_id)
            result = await db.scalars(stmt)
            return [_to_booking_response(booking) for booking in result.all()]

    async def reset(self, shows: List[ShowResponse]) -> None:
        async with self.session_factory() as db:
            await db.execute(delete(BookingSeat))
            await db.execute(delete(Booking))
            await db.execute(delete(Show))
            db.add_all([Show(**show.model_dump()) for show in shows])
            await db.commit()

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
