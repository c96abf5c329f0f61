"""One-off closed days administered individually by staff."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slotbook.db.base import Base
from slotbook.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from slotbook.models.tenant import Tenant


class Holiday(TimestampMixin, Base):
    """A single closed day for a tenant."""

    __tablename__ = "holidays"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "holiday_date", name="uq_holidays_tenant_date"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    holiday_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(255))

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="holidays")
