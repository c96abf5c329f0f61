"""Per-day admission lock rows."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from slotbook.db.base import Base


class BookingDayLock(Base):
    """Serialization point for admissions on one tenant day.

    Every admission upserts its ``(tenant_id, booking_date)`` row and bumps
    ``version`` before reading the day's bookings, so concurrent admissions for
    the same day run one after another.
    """

    __tablename__ = "booking_day_locks"

    tenant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True
    )
    booking_date: Mapped[date] = mapped_column(Date, primary_key=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
