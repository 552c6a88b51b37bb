from typing import List
from fastapi import APIRouter, Depends, status
from showbook.crud.show import crud_show
from showbook.schemas.show import SeatMapResponse, ShowCreate, ShowResponse
from showbook.storage import Storage, get_storage


router = APIRouter(
    prefix="/shows",
    tags=["shows"]
)


@router.get("", response_model=List[ShowResponse])
async def list_shows(storage: Storage = Depends(get_storage)):
    return await crud_show.list_shows(storage)


@router.post("", response_model=ShowResponse, status_code=status.HTTP_201_CREATED)
async def create_show(show: ShowCreate, storage: Storage = Depends(get_storage)):
    return await crud_show.create_show(storage, show)


@router.get("/{show_id}", response_model=ShowResponse)
async def get_show(show_id: str, storage: Storage = Depends(get_storage)):
    return await crud_show.get_show(storage, show_id)


@router.get("/{show_id}/seat-map", response_model=SeatMapResponse)
async def get_seat_map(show_id: str, storage: Storage = Depends(get_storage)):
    return await crud_show.get_seat_map(storage, show_id)
