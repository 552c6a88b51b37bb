from showbook.db.base import Base
from showbook.models import TimestampMixin
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column


class BookingSeat(Base, TimestampMixin):
    # the database itself refuses a second claim on the same seat of a show
    __table_args__ = (
        UniqueConstraint("show_id", "seat_number", name="uix_show_seat_number_unique"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("booking.id", ondelete="CASCADE"), nullable=False, index=True)
    show_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("show.id"), nullable=False)
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
