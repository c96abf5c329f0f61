"""Per-tenant scheduling configuration."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from slotbook.db.base import Base
from slotbook.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from slotbook.models.tenant import Tenant


class TenantSettings(TimestampMixin, Base):
    """Raw, tenant-edited schedule configuration.

    ``work_days``, ``hours`` and ``vacation_days`` hold whatever the settings
    editor stored; they are normalized when the schedule model is loaded.
    """

    __tablename__ = "tenant_settings"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    slot_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    buffer_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    work_days: Mapped[Any | None] = mapped_column(JSON)
    hours: Mapped[Any | None] = mapped_column(JSON)
    vacation_days: Mapped[Any | None] = mapped_column(JSON)
    booking_notes: Mapped[str | None] = mapped_column(Text)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="settings")
