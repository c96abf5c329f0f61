"""Customer bookings and their lifecycle states."""

from __future__ import annotations

import enum
import uuid
from datetime import date, time
from typing import TYPE_CHECKING

from sqlalchemy import (
    Date,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
    Time,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slotbook.db.base import Base
from slotbook.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from slotbook.models.tenant import Tenant


class BookingStatus(str, enum.Enum):
    """Lifecycle states for bookings."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CANCELLED = "cancelled"


BLOCKING_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED}
)

_ACTIVE_SLOT_PREDICATE = "status IN ({})".format(
    ", ".join(sorted(f"'{status.name}'" for status in BLOCKING_STATUSES))
)


class Booking(TimestampMixin, Base):
    """An appointment request placed by a customer."""

    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_tenant_date", "tenant_id", "booking_date"),
        # At most one active booking may start at a given slot; cancelled and
        # declined rows stay in the table for the audit trail.
        Index(
            "uq_bookings_active_slot",
            "tenant_id",
            "booking_date",
            "start_time",
            unique=True,
            postgresql_where=text(_ACTIVE_SLOT_PREDICATE),
            sqlite_where=text(_ACTIVE_SLOT_PREDICATE),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)
    end_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus), nullable=False, default=BookingStatus.PENDING
    )
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64))
    notes: Mapped[str | None] = mapped_column(Text)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="bookings")


__all__ = ["BLOCKING_STATUSES", "Booking", "BookingStatus"]
