"""Tenant model representing a bookable business."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slotbook.db.base import Base
from slotbook.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from slotbook.models.booking import Booking
    from slotbook.models.holiday import Holiday
    from slotbook.models.tenant_settings import TenantSettings


class Tenant(TimestampMixin, Base):
    """A tenant business (e.g., a hair salon) addressed by its slug."""

    __tablename__ = "tenants"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    slug: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    timezone: Mapped[str] = mapped_column(
        String(64), nullable=False, default="Europe/Zurich"
    )

    settings: Mapped["TenantSettings | None"] = relationship(
        "TenantSettings",
        back_populates="tenant",
        uselist=False,
        cascade="all, delete-orphan",
    )
    holidays: Mapped[list["Holiday"]] = relationship(
        "Holiday", back_populates="tenant", cascade="all, delete-orphan"
    )
    bookings: Mapped[list["Booking"]] = relationship(
        "Booking", back_populates="tenant", cascade="all, delete-orphan"
    )
