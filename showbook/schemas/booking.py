from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from showbook.models.booking import BookingStatus


class BookingCreate(BaseModel):
    show_id: str
    seats: List[int] = Field(default_factory=list)
    name: Optional[str] = None
    email: Optional[str] = None


class BookingResponse(BaseModel):
    id: str
    show_id: str
    seats: List[int]
    name: str
    email: Optional[str] = None
    status: BookingStatus
    created_at: datetime
