"""Booking admission and staff booking management endpoints."""

from __future__ import annotations

import datetime
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from slotbook.api import deps
from slotbook.models import Booking, BookingStatus, Tenant
from slotbook.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingRejection,
    BookingStatsRead,
    BookingStatusUpdate,
)
from slotbook.services import booking_service
from slotbook.services.booking_repository import (
    CustomerInfo,
    SqlAlchemyBookingRepository,
)
from slotbook.services.booking_service import AdmissionOutcome
from slotbook.services.exceptions import (
    BookingNotFoundError,
    InvalidStatusTransitionError,
)
from slotbook.services.settings_service import SqlAlchemySettingsProvider

router = APIRouter(prefix="/t/{tenant}")

# The Starlette name for 422 differs between releases.
HTTP_422 = 422

_REJECTION_STATUS = {
    AdmissionOutcome.SLOT_TAKEN: status.HTTP_409_CONFLICT,
    AdmissionOutcome.INVALID_SLOT: HTTP_422,
}


def _serialize_booking(booking: Booking) -> BookingRead:
    return BookingRead(
        id=booking.id,
        tenant_id=booking.tenant_id,
        date=booking.booking_date,
        start_time=booking.start_time,
        end_time=booking.end_time,
        status=BookingStatus(booking.status),
        first_name=booking.first_name,
        last_name=booking.last_name,
        email=booking.email,
        phone=booking.phone,
        notes=booking.notes,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


@router.post(
    "/bookings",
    response_model=BookingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
    responses={
        status.HTTP_409_CONFLICT: {"description": "Slot already taken"},
        HTTP_422: {"description": "Not an offered slot"},
    },
)
async def create_booking(
    payload: BookingCreate,
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    settings_provider: Annotated[
        SqlAlchemySettingsProvider, Depends(deps.get_settings_provider)
    ],
    repository: Annotated[
        SqlAlchemyBookingRepository, Depends(deps.get_booking_repository)
    ],
) -> BookingRead:
    # The tenant row expires if the insert is rolled back.
    tenant_id = tenant.id
    result = await booking_service.create_booking(
        settings_provider,
        repository,
        tenant_id=tenant_id,
        day=payload.date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        customer=CustomerInfo(
            first_name=payload.first_name.strip(),
            last_name=payload.last_name.strip(),
            email=payload.email,
            phone=payload.phone,
            notes=payload.notes,
        ),
    )
    if result.booking is None:
        rejection = BookingRejection(
            code=result.outcome.value, message=result.message or ""
        )
        raise HTTPException(
            status_code=_REJECTION_STATUS[result.outcome],
            detail=rejection.model_dump(),
        )
    return _serialize_booking(result.booking)


@router.get("/bookings", response_model=list[BookingRead], summary="List bookings")
async def list_bookings(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    repository: Annotated[
        SqlAlchemyBookingRepository, Depends(deps.get_booking_repository)
    ],
    date_from: Annotated[datetime.date | None, Query()] = None,
    date_to: Annotated[datetime.date | None, Query()] = None,
    booking_status: Annotated[BookingStatus | None, Query(alias="status")] = None,
) -> list[BookingRead]:
    try:
        bookings = await booking_service.list_bookings(
            repository,
            tenant_id=tenant.id,
            date_from=date_from,
            date_to=date_to,
            status=booking_status,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return [_serialize_booking(booking) for booking in bookings]


@router.get(
    "/bookings/stats",
    response_model=BookingStatsRead,
    summary="Booking dashboard counters",
)
async def get_booking_stats(
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    repository: Annotated[
        SqlAlchemyBookingRepository, Depends(deps.get_booking_repository)
    ],
    today: Annotated[datetime.date | None, Query()] = None,
) -> BookingStatsRead:
    stats = await booking_service.booking_stats(
        repository, tenant_id=tenant.id, today=today or datetime.date.today()
    )
    return BookingStatsRead(
        today_count=stats.today_count,
        week_count=stats.week_count,
        total=stats.total,
        cancelled=stats.cancelled,
        cancellation_rate=stats.cancellation_rate,
    )


@router.patch(
    "/bookings/{booking_id}",
    response_model=BookingRead,
    summary="Change booking status",
)
async def update_booking_status(
    booking_id: uuid.UUID,
    payload: BookingStatusUpdate,
    tenant: Annotated[Tenant, Depends(deps.get_tenant)],
    repository: Annotated[
        SqlAlchemyBookingRepository, Depends(deps.get_booking_repository)
    ],
) -> BookingRead:
    try:
        booking = await booking_service.update_booking_status(
            repository,
            tenant_id=tenant.id,
            booking_id=booking_id,
            new_status=payload.status,
        )
    except BookingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except InvalidStatusTransitionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return _serialize_booking(booking)
