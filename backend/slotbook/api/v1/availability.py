"""Public availability endpoint."""

from __future__ import annotations

import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from slotbook.api import deps
from slotbook.models import Tenant
from slotbook.schemas.availability import AvailabilityRead, AvailableSlotRead
from slotbook.services import booking_service
from slotbook.services.booking_repository import SqlAlchemyBookingRepository
from slotbook.services.settings_service import SqlAlchemySettingsProvider

router = APIRouter(prefix="/t/{tenant}")


@router.get("/slots", response_model=AvailabilityRead, summary="Available slots")
async def list_available_slots(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    settings_provider: Annotated[
        SqlAlchemySettingsProvider, Depends(deps.get_settings_provider)
    ],
    repository: Annotated[
        SqlAlchemyBookingRepository, Depends(deps.get_booking_repository)
    ],
    day: Annotated[datetime.date, Query(alias="date")],
) -> AvailabilityRead:
    """Bookable slots for ``date`` on the tenant-local clock."""
    availability = await booking_service.get_availability(
        settings_provider, repository, tenant_id=tenant.id, day=day
    )
    return AvailabilityRead(
        date=availability.day,
        slot_minutes=availability.policy.slot_minutes,
        slots=[
            AvailableSlotRead(start=slot.start, end=slot.end)
            for slot in availability.slots
        ],
    )
