from typing import List, Optional
from fastapi import APIRouter, Depends, status

from showbook.api.deps import get_allocator
from showbook.core.locks import ShowLocks
from showbook.crud.booking import CRUDBooking
from showbook.schemas.booking import BookingCreate, BookingResponse
from showbook.storage import Storage, get_show_locks, get_storage

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"]
)


@router.get("", response_model=List[BookingResponse])
async def list_bookings(
        show_id: Optional[str] = None,
        storage: Storage = Depends(get_storage),
        allocator: CRUDBooking = Depends(get_allocator)):
    return await allocator.list_bookings(storage, show_id)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def request_booking(
        data: BookingCreate,
        storage: Storage = Depends(get_storage),
        show_locks: ShowLocks = Depends(get_show_locks),
        allocator: CRUDBooking = Depends(get_allocator)):
    return await allocator.request_booking(storage, show_locks, data)
