"""Schemas for holiday administration."""

from __future__ import annotations

import datetime
import uuid

from pydantic import BaseModel, Field


class HolidayCreate(BaseModel):
    date: datetime.date
    reason: str | None = Field(default=None, max_length=255)


class HolidayRead(HolidayCreate):
    id: uuid.UUID
    tenant_id: uuid.UUID
