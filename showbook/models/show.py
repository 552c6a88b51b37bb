from datetime import datetime
from enum import Enum
from typing import Optional
from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from showbook.db.base import Base
from showbook.models import TimestampMixin


class ShowType(str, Enum):
    SHOW = "show"
    TRIP = "trip"
    APPOINTMENT = "appointment"


class Show(Base, TimestampMixin):
    __table_args__ = (
        CheckConstraint("total_seats IS NULL OR total_seats >= 0", name="ck_show_total_seats_non_negative"),
    )
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    # NULL means the show has no seat model (appointments)
    total_seats: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    type: Mapped[ShowType] = mapped_column(
        SAEnum(ShowType, name="show_type_enum"), nullable=False, default=ShowType.SHOW)
    price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
