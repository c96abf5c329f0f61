"""Tenant settings boundary: raw storage in, typed schedule model out."""

from __future__ import annotations

import uuid
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.models import Tenant, TenantSettings
from slotbook.schemas.settings import (
    TenantSettingsRead,
    TenantSettingsUpdate,
    TimeRangeSchema,
    VacationRangeSchema,
)
from slotbook.services import holiday_service
from slotbook.services.schedule_model import ScheduleModel, build_schedule_model


class SettingsProvider(Protocol):
    """Source of a tenant's current schedule model."""

    async def load_schedule_model(self, tenant_id: uuid.UUID) -> ScheduleModel:
        ...


async def get_tenant_settings(
    session: AsyncSession,
    *,
    tenant_id: uuid.UUID,
) -> TenantSettings | None:
    result = await session.execute(
        select(TenantSettings).where(TenantSettings.tenant_id == tenant_id)
    )
    return result.scalar_one_or_none()


async def load_schedule_model(
    session: AsyncSession,
    *,
    tenant_id: uuid.UUID,
) -> ScheduleModel:
    """Read and normalize one tenant's schedule configuration.

    A tenant without a settings row gets the built-in defaults.
    """
    settings = await get_tenant_settings(session, tenant_id=tenant_id)
    holidays = await holiday_service.list_holiday_dates(session, tenant_id=tenant_id)
    if settings is None:
        return build_schedule_model(holidays=holidays)
    return build_schedule_model(
        hours=settings.hours,
        work_days=settings.work_days,
        vacation_days=settings.vacation_days,
        holidays=holidays,
        slot_minutes=settings.slot_minutes,
        buffer_minutes=settings.buffer_minutes,
    )


class SqlAlchemySettingsProvider:
    """Settings provider backed by the ``tenant_settings`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def load_schedule_model(self, tenant_id: uuid.UUID) -> ScheduleModel:
        return await load_schedule_model(self._session, tenant_id=tenant_id)


def serialize_settings(
    tenant: Tenant, schedule: ScheduleModel, notes: str | None
) -> TenantSettingsRead:
    """Render the effective (normalized, defaults applied) settings."""
    return TenantSettingsRead(
        tenant=tenant.slug,
        name=tenant.name,
        email=tenant.email,
        timezone=tenant.timezone,
        slot_minutes=schedule.policy.slot_minutes,
        buffer_minutes=schedule.policy.buffer_minutes,
        work_days=sorted(schedule.work_days),
        hours={
            weekday: [
                TimeRangeSchema(start=time_range.start, end=time_range.end)
                for time_range in ranges
            ]
            for weekday, ranges in sorted(schedule.weekly_hours.items())
        },
        vacation_days=[
            VacationRangeSchema(
                start=vacation.start, end=vacation.end, note=vacation.note
            )
            for vacation in schedule.vacations
        ],
        booking_notes=notes,
    )


async def read_settings(
    session: AsyncSession, *, tenant: Tenant
) -> TenantSettingsRead:
    stored = await get_tenant_settings(session, tenant_id=tenant.id)
    schedule = await load_schedule_model(session, tenant_id=tenant.id)
    notes = stored.booking_notes if stored is not None else None
    return serialize_settings(tenant, schedule, notes)


async def update_settings(
    session: AsyncSession,
    *,
    tenant: Tenant,
    payload: TenantSettingsUpdate,
) -> TenantSettingsRead:
    """Replace the tenant's stored schedule configuration.

    The write is last-write-wins; availability computations already in flight
    keep the schedule model they loaded.
    """
    stored = await get_tenant_settings(session, tenant_id=tenant.id)
    if stored is None:
        stored = TenantSettings(tenant_id=tenant.id)
        session.add(stored)

    stored.slot_minutes = payload.slot_minutes
    stored.buffer_minutes = payload.buffer_minutes
    stored.work_days = sorted(set(payload.work_days))
    stored.hours = {
        str(weekday): [time_range.to_storage() for time_range in ranges]
        for weekday, ranges in payload.hours.items()
    }
    stored.vacation_days = [vacation.to_storage() for vacation in payload.vacation_days]
    stored.booking_notes = payload.booking_notes
    await session.commit()
    return await read_settings(session, tenant=tenant)
