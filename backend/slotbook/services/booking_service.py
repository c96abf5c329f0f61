"""Availability reads, booking admission and booking lifecycle."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import date, time, timedelta

from slotbook.models import Booking, BookingStatus
from slotbook.services.booking_repository import (
    BookingRepository,
    Created,
    CustomerInfo,
)
from slotbook.services.conflict_service import filter_available
from slotbook.services.exceptions import (
    BookingNotFoundError,
    InvalidStatusTransitionError,
)
from slotbook.services.schedule_model import SlotPolicy
from slotbook.services.settings_service import SettingsProvider
from slotbook.services.slot_service import CandidateSlot, find_slot, generate_slots

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.PENDING: {
        BookingStatus.CONFIRMED,
        BookingStatus.DECLINED,
        BookingStatus.CANCELLED,
    },
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED},
    BookingStatus.DECLINED: set(),
    BookingStatus.CANCELLED: set(),
}


class AdmissionOutcome(str, enum.Enum):
    """Externally visible result of a booking request."""

    CREATED = "created"
    SLOT_TAKEN = "slot_taken"
    INVALID_SLOT = "invalid_slot"


@dataclass(slots=True, frozen=True)
class AdmissionResult:
    outcome: AdmissionOutcome
    booking: Booking | None = None
    message: str | None = None

    @property
    def created(self) -> bool:
        return self.outcome is AdmissionOutcome.CREATED


@dataclass(slots=True, frozen=True)
class DayAvailability:
    """Free slots of one day and the policy they were computed under."""

    day: date
    policy: SlotPolicy
    slots: list[CandidateSlot]


@dataclass(slots=True, frozen=True)
class BookingStats:
    today_count: int
    week_count: int
    total: int
    cancelled: int

    @property
    def cancellation_rate(self) -> float:
        """Share of cancelled bookings in percent; 0 without bookings."""
        if self.total == 0:
            return 0.0
        return self.cancelled / self.total * 100


async def get_availability(
    settings_provider: SettingsProvider,
    repository: BookingRepository,
    *,
    tenant_id: uuid.UUID,
    day: date,
) -> DayAvailability:
    """Slots a customer can pick on ``day`` right now."""
    schedule = await settings_provider.load_schedule_model(tenant_id)
    candidates = generate_slots(day, schedule)
    if not candidates:
        return DayAvailability(day=day, policy=schedule.policy, slots=[])
    bookings = await repository.list_active_bookings(tenant_id, day)
    free = filter_available(candidates, bookings, schedule.policy.buffer_minutes)
    return DayAvailability(day=day, policy=schedule.policy, slots=free)


async def create_booking(
    settings_provider: SettingsProvider,
    repository: BookingRepository,
    *,
    tenant_id: uuid.UUID,
    day: date,
    start_time: time,
    end_time: time,
    customer: CustomerInfo,
) -> AdmissionResult:
    """Admit a booking request for one slot of the current grid.

    The slot must be one the generator produces under the tenant's current
    schedule; the conflict re-check and the insert happen atomically inside
    the repository. Rejections are results, not exceptions.
    """
    schedule = await settings_provider.load_schedule_model(tenant_id)
    slot = find_slot(day, schedule, start_time=start_time, end_time=end_time)
    if slot is None:
        logger.info(
            "Rejected booking for tenant %s on %s %s-%s: not an offered slot",
            tenant_id,
            day,
            start_time,
            end_time,
        )
        return AdmissionResult(
            outcome=AdmissionOutcome.INVALID_SLOT,
            message="The requested time is not an available slot",
        )

    result = await repository.insert_booking(
        tenant_id,
        day,
        slot,
        customer,
        buffer_minutes=schedule.policy.buffer_minutes,
    )
    if isinstance(result, Created):
        logger.info(
            "Created booking %s for tenant %s on %s %s",
            result.booking.id,
            tenant_id,
            day,
            slot.start,
        )
        return AdmissionResult(
            outcome=AdmissionOutcome.CREATED, booking=result.booking
        )

    logger.info(
        "Slot %s on %s already taken for tenant %s", slot.start, day, tenant_id
    )
    return AdmissionResult(
        outcome=AdmissionOutcome.SLOT_TAKEN,
        message="The requested slot has just been taken",
    )


async def update_booking_status(
    repository: BookingRepository,
    *,
    tenant_id: uuid.UUID,
    booking_id: uuid.UUID,
    new_status: BookingStatus,
) -> Booking:
    """Move a booking through its lifecycle; bookings are never deleted."""
    booking = await repository.get_booking(tenant_id, booking_id)
    if booking is None:
        raise BookingNotFoundError("Booking not found")
    current = BookingStatus(booking.status)
    if new_status == current:
        return booking
    if new_status not in _ALLOWED_STATUS_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(
            f"Cannot change booking from {current.value} to {new_status.value}"
        )
    return await repository.set_status(booking, new_status)


async def list_bookings(
    repository: BookingRepository,
    *,
    tenant_id: uuid.UUID,
    date_from: date | None = None,
    date_to: date | None = None,
    status: BookingStatus | None = None,
) -> list[Booking]:
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValueError("date_from must be on or before date_to")
    return await repository.list_bookings(
        tenant_id, date_from=date_from, date_to=date_to, status=status
    )


async def booking_stats(
    repository: BookingRepository,
    *,
    tenant_id: uuid.UUID,
    today: date,
) -> BookingStats:
    """Dashboard counters: bookings today, in the Monday-based week of
    ``today``, and the share of cancelled bookings over all time."""
    bookings = await repository.list_bookings(tenant_id)
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)
    return BookingStats(
        today_count=sum(1 for booking in bookings if booking.booking_date == today),
        week_count=sum(
            1 for booking in bookings if week_start <= booking.booking_date <= week_end
        ),
        total=len(bookings),
        cancelled=sum(
            1 for booking in bookings if booking.status is BookingStatus.CANCELLED
        ),
    )
