from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from showbook.core.exceptions import ShowNotFoundError
from showbook.crud.booking import crud_booking
from showbook.models import utcnow
from showbook.schemas.show import SeatMapResponse, ShowCreate, ShowResponse
from showbook.storage.base import Storage


DEFAULT_SHOW_NAME = "Untitled"


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # naive timestamps are taken to be UTC so every start_time stays comparable
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CRUDShow:
    async def create_show(self, storage: Storage, data: ShowCreate) -> ShowResponse:
        now = utcnow()
        show = ShowResponse(
            id=data.id or str(uuid4()),
            name=data.name or data.title or DEFAULT_SHOW_NAME,
            description=data.description,
            start_time=_as_utc(data.start_time) or now,
            total_seats=data.total_seats,
            type=data.type,
            price=data.price,
            created_at=now,
        )
        return await storage.create_show(show)

    async def get_show(self, storage: Storage, show_id: str) -> ShowResponse:
        show = await storage.get_show(show_id)
        if show is None:
            raise ShowNotFoundError(show_id)
        return show

    async def list_shows(self, storage: Storage) -> List[ShowResponse]:
        shows = await storage.list_shows()
        # sorted() is stable, so equal start times keep insertion order
        return sorted(shows, key=lambda show: _as_utc(show.start_time))

    async def get_seat_map(self, storage: Storage, show_id: str) -> SeatMapResponse:
        show = await self.get_show(storage, show_id)
        if show.total_seats is None:
            return SeatMapResponse(show_id=show.id, total_seats=None, taken=[], available=[])
        taken = await crud_booking.taken_seats(storage, show.id)
        return SeatMapResponse(
            show_id=show.id,
            total_seats=show.total_seats,
            taken=sorted(taken),
            available=[seat for seat in range(1, show.total_seats + 1) if seat not in taken],
        )


crud_show = CRUDShow()
