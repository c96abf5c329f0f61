"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.db.session import get_session
from slotbook.models import Tenant
from slotbook.services.booking_repository import SqlAlchemyBookingRepository
from slotbook.services.exceptions import TenantNotFoundError
from slotbook.services.settings_service import SqlAlchemySettingsProvider
from slotbook.services.tenant_service import get_tenant_by_slug


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_tenant(
    tenant: str,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Tenant:
    """Resolve the ``{tenant}`` path segment to a tenant row."""
    try:
        return await get_tenant_by_slug(session, tenant)
    except TenantNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc


def get_settings_provider(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlAlchemySettingsProvider:
    return SqlAlchemySettingsProvider(session)


def get_booking_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlAlchemyBookingRepository:
    return SqlAlchemyBookingRepository(session)
