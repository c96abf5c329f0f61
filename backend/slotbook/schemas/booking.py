"""Pydantic schemas for booking endpoints."""

from __future__ import annotations

import datetime
import uuid

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from slotbook.models.booking import BookingStatus


class BookingCreate(BaseModel):
    """Customer booking request for one slot of the availability grid."""

    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=64)
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("start_time", "end_time")
    @classmethod
    def _require_wall_clock(cls, value: datetime.time) -> datetime.time:
        if value.tzinfo is not None:
            raise ValueError("times are tenant-local and must not carry an offset")
        return value

    @model_validator(mode="after")
    def _check_times(self) -> "BookingCreate":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingRead(BaseModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    status: BookingStatus
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    notes: str | None = None
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None

    @field_serializer("start_time", "end_time")
    def _format_clock(self, value: datetime.time) -> str:
        return value.strftime("%H:%M")


class BookingRejection(BaseModel):
    """Body of a rejected booking request; ``code`` tells the client what to do."""

    code: str
    message: str


class BookingStatsRead(BaseModel):
    today_count: int
    week_count: int
    total: int
    cancelled: int
    cancellation_rate: float
