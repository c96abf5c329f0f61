"""Tenant lookup and provisioning."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.core.config import get_settings
from slotbook.models import Tenant, TenantSettings
from slotbook.services.exceptions import TenantExistsError, TenantNotFoundError

logger = logging.getLogger(__name__)


def normalize_tenant_slug(value: str | None) -> str:
    return (value or "").strip().lower()


async def get_tenant_by_slug(session: AsyncSession, slug: str | None) -> Tenant:
    """Resolve a tenant by slug, falling back to ``DEFAULT_TENANT`` when blank."""
    normalized = normalize_tenant_slug(slug) or get_settings().default_tenant
    if not normalized:
        raise TenantNotFoundError("Tenant not found")
    result = await session.execute(select(Tenant).where(Tenant.slug == normalized))
    tenant = result.scalar_one_or_none()
    if tenant is None:
        raise TenantNotFoundError("Tenant not found")
    return tenant


async def create_tenant(
    session: AsyncSession,
    *,
    slug: str,
    name: str,
    email: str | None = None,
    timezone: str | None = None,
) -> Tenant:
    """Create a tenant together with its default scheduling settings.

    Hours and work days are left empty so the built-in business-hours template
    applies until the tenant edits them.
    """
    settings = get_settings()
    normalized = normalize_tenant_slug(slug)
    tenant = Tenant(
        slug=normalized,
        name=name.strip(),
        email=email,
        timezone=timezone or settings.default_timezone,
    )
    tenant.settings = TenantSettings(
        slot_minutes=settings.default_slot_minutes,
        buffer_minutes=settings.default_buffer_minutes,
        work_days=[],
        hours={},
        vacation_days=[],
    )
    session.add(tenant)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise TenantExistsError("Tenant slug already in use") from exc
    await session.refresh(tenant)
    logger.info("Provisioned tenant %s", normalized)
    return tenant
