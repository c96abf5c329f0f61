"""Schemas for tenant scheduling settings."""

from __future__ import annotations

from datetime import date, time
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)


class TimeRangeSchema(BaseModel):
    """Opening window serialized as ``{"from": "HH:MM", "to": "HH:MM"}``."""

    start: time = Field(alias="from")
    end: time = Field(alias="to")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("start", "end")
    @classmethod
    def _require_wall_clock(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError("times are tenant-local and must not carry an offset")
        return value

    @model_validator(mode="after")
    def _check_order(self) -> "TimeRangeSchema":
        if self.start >= self.end:
            raise ValueError("'from' must be before 'to'")
        return self

    @field_serializer("start", "end")
    def _format_clock(self, value: time) -> str:
        return value.strftime("%H:%M")

    def to_storage(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)


class VacationRangeSchema(BaseModel):
    start: date
    end: date | None = None
    note: str | None = Field(default=None, max_length=255)

    @model_validator(mode="after")
    def _check_order(self) -> "VacationRangeSchema":
        if self.end is not None and self.end < self.start:
            raise ValueError("'end' must not be before 'start'")
        return self

    def to_storage(self) -> dict[str, Any]:
        data: dict[str, Any] = {"start": self.start.isoformat()}
        if self.end is not None:
            data["end"] = self.end.isoformat()
        if self.note:
            data["note"] = self.note
        return data


class TenantSettingsUpdate(BaseModel):
    """Full replacement of a tenant's schedule configuration.

    Weekdays are numbered ``0 = Sunday … 6 = Saturday``.
    """

    slot_minutes: int = Field(30, gt=0, le=24 * 60)
    buffer_minutes: int = Field(0, ge=0, le=24 * 60)
    work_days: list[int] = Field(default_factory=list)
    hours: dict[int, list[TimeRangeSchema]] = Field(default_factory=dict)
    vacation_days: list[VacationRangeSchema] = Field(default_factory=list)
    booking_notes: str | None = None

    @field_validator("work_days")
    @classmethod
    def _check_work_days(cls, value: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("work days must be between 0 and 6")
        return value

    @field_validator("hours")
    @classmethod
    def _check_weekdays(
        cls, value: dict[int, list[TimeRangeSchema]]
    ) -> dict[int, list[TimeRangeSchema]]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("weekday keys must be between 0 and 6")
        return value


class TenantSettingsRead(BaseModel):
    """Effective settings after normalization and defaults."""

    tenant: str
    name: str
    email: str | None = None
    timezone: str
    slot_minutes: int
    buffer_minutes: int
    work_days: list[int]
    hours: dict[int, list[TimeRangeSchema]]
    vacation_days: list[VacationRangeSchema]
    booking_notes: str | None = None
