"""Schemas for the public availability endpoint."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, field_serializer


class AvailableSlotRead(BaseModel):
    """One bookable slot on the tenant-local clock."""

    start: datetime.time
    end: datetime.time

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("start", "end")
    def _format_clock(self, value: datetime.time) -> str:
        return value.strftime("%H:%M")


class AvailabilityRead(BaseModel):
    date: datetime.date
    slot_minutes: int
    slots: list[AvailableSlotRead]
