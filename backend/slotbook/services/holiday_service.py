"""Manage one-off tenant holidays."""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.models import Holiday
from slotbook.services.exceptions import HolidayExistsError, HolidayNotFoundError


async def list_holidays(
    session: AsyncSession,
    *,
    tenant_id: uuid.UUID,
) -> list[Holiday]:
    stmt: Select[tuple[Holiday]] = (
        select(Holiday)
        .where(Holiday.tenant_id == tenant_id)
        .order_by(Holiday.holiday_date.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_holiday_dates(
    session: AsyncSession,
    *,
    tenant_id: uuid.UUID,
) -> frozenset[date]:
    result = await session.execute(
        select(Holiday.holiday_date).where(Holiday.tenant_id == tenant_id)
    )
    return frozenset(result.scalars().all())


async def add_holiday(
    session: AsyncSession,
    *,
    tenant_id: uuid.UUID,
    holiday_date: date,
    reason: str | None = None,
) -> Holiday:
    holiday = Holiday(
        tenant_id=tenant_id,
        holiday_date=holiday_date,
        reason=(reason or "").strip() or None,
    )
    session.add(holiday)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HolidayExistsError("Date is already a holiday") from exc
    await session.refresh(holiday)
    return holiday


async def remove_holiday(
    session: AsyncSession,
    *,
    tenant_id: uuid.UUID,
    holiday_id: uuid.UUID,
) -> None:
    holiday = await session.get(Holiday, holiday_id)
    if holiday is None or holiday.tenant_id != tenant_id:
        raise HolidayNotFoundError("Holiday not found")
    await session.delete(holiday)
    await session.commit()
