"""Tenant provisioning endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.api import deps
from slotbook.models import Tenant
from slotbook.schemas.tenant import TenantCreate, TenantRead
from slotbook.services import tenant_service
from slotbook.services.exceptions import TenantExistsError

router = APIRouter()


@router.post(
    "",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tenant",
)
async def create_tenant(
    payload: TenantCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TenantRead:
    try:
        tenant = await tenant_service.create_tenant(
            session,
            slug=payload.slug,
            name=payload.name,
            email=payload.email,
            timezone=payload.timezone,
        )
    except TenantExistsError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return TenantRead.model_validate(tenant)


@router.get("/{tenant}", response_model=TenantRead, summary="Get tenant")
async def get_tenant(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
) -> TenantRead:
    return TenantRead.model_validate(tenant)
