"""Holiday administration endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.api import deps
from slotbook.models import Holiday, Tenant
from slotbook.schemas.holiday import HolidayCreate, HolidayRead
from slotbook.services import holiday_service
from slotbook.services.exceptions import HolidayExistsError, HolidayNotFoundError

router = APIRouter(prefix="/t/{tenant}")


def _serialize_holiday(holiday: Holiday) -> HolidayRead:
    return HolidayRead(
        id=holiday.id,
        tenant_id=holiday.tenant_id,
        date=holiday.holiday_date,
        reason=holiday.reason,
    )


@router.get("/holidays", response_model=list[HolidayRead], summary="List holidays")
async def list_holidays(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[HolidayRead]:
    holidays = await holiday_service.list_holidays(session, tenant_id=tenant.id)
    return [_serialize_holiday(holiday) for holiday in holidays]


@router.post(
    "/holidays",
    response_model=HolidayRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add holiday",
)
async def create_holiday(
    payload: HolidayCreate,
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HolidayRead:
    try:
        holiday = await holiday_service.add_holiday(
            session,
            tenant_id=tenant.id,
            holiday_date=payload.date,
            reason=payload.reason,
        )
    except HolidayExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return _serialize_holiday(holiday)


@router.delete(
    "/holidays/{holiday_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove holiday",
)
async def delete_holiday(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    holiday_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> None:
    try:
        await holiday_service.remove_holiday(
            session, tenant_id=tenant.id, holiday_id=holiday_id
        )
    except HolidayNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return None
