"""Tenant schedule settings endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.api import deps
from slotbook.models import Tenant
from slotbook.schemas.settings import TenantSettingsRead, TenantSettingsUpdate
from slotbook.services import settings_service

router = APIRouter(prefix="/t/{tenant}")


@router.get(
    "/settings",
    response_model=TenantSettingsRead,
    summary="Effective schedule settings",
)
async def read_settings(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TenantSettingsRead:
    return await settings_service.read_settings(session, tenant=tenant)


@router.put(
    "/settings",
    response_model=TenantSettingsRead,
    summary="Replace schedule settings",
)
async def update_settings(
    payload: TenantSettingsUpdate,
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TenantSettingsRead:
    return await settings_service.update_settings(
        session, tenant=tenant, payload=payload
    )
