from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from showbook.models.show import ShowType


class ShowCreate(BaseModel):
    """Every field a client may send when creating a show.

    All of them are optional; missing ones are filled in by the catalog.
    """
    id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    name: Optional[str] = None
    # older clients send the display name as "title"
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    total_seats: Optional[int] = Field(default=None, ge=0, description="null means the show has no seat model")
    type: ShowType = ShowType.SHOW
    price: Optional[float] = None


class ShowResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    start_time: datetime
    total_seats: Optional[int] = None
    type: ShowType
    price: Optional[float] = None
    created_at: datetime

    class Config:
        from_attributes = True  # orm_mode


class SeatMapResponse(BaseModel):
    show_id: str
    total_seats: Optional[int] = None
    taken: List[int]
    available: List[int]
