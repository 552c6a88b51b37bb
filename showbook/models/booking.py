from enum import Enum
from typing import List, Optional
from sqlalchemy import ForeignKey, String, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from showbook.db.base import Base
from showbook.models import TimestampMixin


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"


class Booking(Base, TimestampMixin):
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    show_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("show.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[BookingStatus] = mapped_column(
        SAEnum(BookingStatus, name="booking_status_enum"), nullable=False, default=BookingStatus.CONFIRMED)
    seats: Mapped[List["BookingSeat"]] = relationship(
        cascade="all, delete-orphan", lazy="selectin", order_by="BookingSeat.seat_number")
