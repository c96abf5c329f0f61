"""Booking admission, availability and lifecycle against in-memory storage."""

from __future__ import annotations

import asyncio
import uuid
from datetime import date, time

import pytest

from fakes import InMemoryBookingRepository, StaticSettingsProvider, StoredBooking

from slotbook.models import BookingStatus
from slotbook.services import booking_service
from slotbook.services.booking_repository import CustomerInfo
from slotbook.services.booking_service import AdmissionOutcome
from slotbook.services.exceptions import (
    BookingNotFoundError,
    InvalidStatusTransitionError,
)
from slotbook.services.schedule_model import build_schedule_model
from slotbook.services.slot_service import CandidateSlot

pytestmark = pytest.mark.asyncio

TENANT_ID = uuid.uuid4()
MONDAY = date(2030, 1, 7)
CUSTOMER = CustomerInfo(
    first_name="Ada", last_name="Lovelace", email="ada@example.com"
)


def _weekday_provider(**kwargs) -> StaticSettingsProvider:
    hours = {
        str(day): [{"from": "09:00", "to": "17:00"}] for day in (1, 2, 3, 4, 5)
    }
    return StaticSettingsProvider(
        build_schedule_model(hours=hours, work_days=[1, 2, 3, 4, 5], **kwargs)
    )


async def _book(provider, repository, start: time, end: time):
    return await booking_service.create_booking(
        provider,
        repository,
        tenant_id=TENANT_ID,
        day=MONDAY,
        start_time=start,
        end_time=end,
        customer=CUSTOMER,
    )


async def test_monday_with_one_confirmed_booking() -> None:
    provider = _weekday_provider(slot_minutes=30, buffer_minutes=0)
    repository = InMemoryBookingRepository()
    repository.add(
        StoredBooking(
            tenant_id=TENANT_ID,
            booking_date=MONDAY,
            start_time=time(10, 0),
            end_time=time(10, 30),
            status=BookingStatus.CONFIRMED,
        )
    )

    availability = await booking_service.get_availability(
        provider, repository, tenant_id=TENANT_ID, day=MONDAY
    )
    slots = availability.slots

    assert len(slots) == 15
    assert CandidateSlot(time(10, 0), time(10, 30)) not in slots
    assert slots[0].start == time(9, 0)
    assert slots[-1].end == time(17, 0)


class _ChangingSettingsProvider:
    """Hands out a different grid on every load, like a concurrent settings edit."""

    def __init__(self, *schedules) -> None:
        self.schedules = list(schedules)
        self.loads = 0

    async def load_schedule_model(self, tenant_id: uuid.UUID):
        schedule = self.schedules[min(self.loads, len(self.schedules) - 1)]
        self.loads += 1
        return schedule


async def test_availability_reports_the_policy_its_slots_came_from() -> None:
    hours = {"1": [{"from": "09:00", "to": "17:00"}]}
    provider = _ChangingSettingsProvider(
        build_schedule_model(hours=hours, work_days=[1], slot_minutes=30),
        build_schedule_model(hours=hours, work_days=[1], slot_minutes=60),
    )

    availability = await booking_service.get_availability(
        provider, InMemoryBookingRepository(), tenant_id=TENANT_ID, day=MONDAY
    )

    assert provider.loads == 1
    assert availability.day == MONDAY
    assert availability.policy.slot_minutes == 30
    assert len(availability.slots) == 16


async def test_create_booking_admits_free_slot() -> None:
    provider = _weekday_provider()
    repository = InMemoryBookingRepository()

    result = await _book(provider, repository, time(9, 0), time(9, 30))

    assert result.created
    assert result.booking is not None
    assert result.booking.status == BookingStatus.PENDING
    assert result.booking.first_name == "Ada"
    availability = await booking_service.get_availability(
        provider, repository, tenant_id=TENANT_ID, day=MONDAY
    )
    slots = availability.slots
    assert CandidateSlot(time(9, 0), time(9, 30)) not in slots


async def test_create_booking_rejects_time_off_the_grid() -> None:
    provider = _weekday_provider()
    repository = InMemoryBookingRepository()

    result = await _book(provider, repository, time(9, 15), time(9, 45))

    assert result.outcome is AdmissionOutcome.INVALID_SLOT
    assert result.booking is None
    assert repository.bookings == []


async def test_create_booking_rejects_closed_day() -> None:
    provider = _weekday_provider(holidays=[MONDAY])
    repository = InMemoryBookingRepository()

    result = await _book(provider, repository, time(9, 0), time(9, 30))

    assert result.outcome is AdmissionOutcome.INVALID_SLOT


async def test_second_booking_for_same_slot_is_taken() -> None:
    provider = _weekday_provider()
    repository = InMemoryBookingRepository()

    first = await _book(provider, repository, time(11, 0), time(11, 30))
    second = await _book(provider, repository, time(11, 0), time(11, 30))

    assert first.outcome is AdmissionOutcome.CREATED
    assert second.outcome is AdmissionOutcome.SLOT_TAKEN
    assert len(repository.bookings) == 1


async def test_buffer_rejects_adjacent_slot() -> None:
    provider = _weekday_provider(buffer_minutes=10)
    repository = InMemoryBookingRepository()

    await _book(provider, repository, time(10, 0), time(10, 30))
    adjacent = await _book(provider, repository, time(10, 30), time(11, 0))
    later = await _book(provider, repository, time(11, 0), time(11, 30))

    assert adjacent.outcome is AdmissionOutcome.SLOT_TAKEN
    assert later.outcome is AdmissionOutcome.CREATED


async def test_cancelled_booking_frees_the_slot() -> None:
    provider = _weekday_provider()
    repository = InMemoryBookingRepository()

    first = await _book(provider, repository, time(14, 0), time(14, 30))
    assert first.booking is not None
    await booking_service.update_booking_status(
        repository,
        tenant_id=TENANT_ID,
        booking_id=first.booking.id,
        new_status=BookingStatus.CANCELLED,
    )
    again = await _book(provider, repository, time(14, 0), time(14, 30))

    assert again.outcome is AdmissionOutcome.CREATED


async def test_concurrent_requests_for_one_slot_admit_exactly_one() -> None:
    provider = _weekday_provider()
    repository = InMemoryBookingRepository()

    results = await asyncio.gather(
        *(_book(provider, repository, time(9, 30), time(10, 0)) for _ in range(5))
    )

    outcomes = sorted(result.outcome.value for result in results)
    assert outcomes == ["created"] + ["slot_taken"] * 4
    assert len(repository.bookings) == 1


async def test_concurrent_requests_for_colliding_buffered_slots() -> None:
    provider = _weekday_provider(buffer_minutes=30)
    repository = InMemoryBookingRepository()

    results = await asyncio.gather(
        _book(provider, repository, time(13, 0), time(13, 30)),
        _book(provider, repository, time(13, 30), time(14, 0)),
    )

    assert sum(result.created for result in results) == 1


async def test_status_transitions_follow_lifecycle() -> None:
    repository = InMemoryBookingRepository()
    booking = repository.add(
        StoredBooking(
            tenant_id=TENANT_ID,
            booking_date=MONDAY,
            start_time=time(9, 0),
            end_time=time(9, 30),
        )
    )

    confirmed = await booking_service.update_booking_status(
        repository,
        tenant_id=TENANT_ID,
        booking_id=booking.id,
        new_status=BookingStatus.CONFIRMED,
    )
    assert confirmed.status == BookingStatus.CONFIRMED

    with pytest.raises(InvalidStatusTransitionError):
        await booking_service.update_booking_status(
            repository,
            tenant_id=TENANT_ID,
            booking_id=booking.id,
            new_status=BookingStatus.DECLINED,
        )

    cancelled = await booking_service.update_booking_status(
        repository,
        tenant_id=TENANT_ID,
        booking_id=booking.id,
        new_status=BookingStatus.CANCELLED,
    )
    assert cancelled.status == BookingStatus.CANCELLED

    with pytest.raises(InvalidStatusTransitionError):
        await booking_service.update_booking_status(
            repository,
            tenant_id=TENANT_ID,
            booking_id=booking.id,
            new_status=BookingStatus.PENDING,
        )


async def test_status_update_is_scoped_to_tenant() -> None:
    repository = InMemoryBookingRepository()
    booking = repository.add(
        StoredBooking(
            tenant_id=TENANT_ID,
            booking_date=MONDAY,
            start_time=time(9, 0),
            end_time=time(9, 30),
        )
    )

    with pytest.raises(BookingNotFoundError):
        await booking_service.update_booking_status(
            repository,
            tenant_id=uuid.uuid4(),
            booking_id=booking.id,
            new_status=BookingStatus.CONFIRMED,
        )


async def test_list_bookings_rejects_inverted_range() -> None:
    repository = InMemoryBookingRepository()
    with pytest.raises(ValueError):
        await booking_service.list_bookings(
            repository,
            tenant_id=TENANT_ID,
            date_from=date(2030, 1, 10),
            date_to=date(2030, 1, 1),
        )


async def test_booking_stats_counts_today_week_and_cancellations() -> None:
    repository = InMemoryBookingRepository()
    wednesday = date(2030, 1, 9)
    for day, booking_status in (
        (wednesday, BookingStatus.CONFIRMED),
        (wednesday, BookingStatus.CANCELLED),
        (MONDAY, BookingStatus.PENDING),
        (date(2030, 1, 13), BookingStatus.DECLINED),
        (date(2030, 1, 14), BookingStatus.CANCELLED),
    ):
        repository.add(
            StoredBooking(
                tenant_id=TENANT_ID,
                booking_date=day,
                start_time=time(9, 0),
                end_time=time(9, 30),
                status=booking_status,
            )
        )
    repository.add(
        StoredBooking(
            tenant_id=uuid.uuid4(),
            booking_date=wednesday,
            start_time=time(9, 0),
            end_time=time(9, 30),
        )
    )

    stats = await booking_service.booking_stats(
        repository, tenant_id=TENANT_ID, today=wednesday
    )

    assert stats.today_count == 2
    assert stats.week_count == 4
    assert stats.total == 5
    assert stats.cancelled == 2
    assert stats.cancellation_rate == pytest.approx(40.0)


async def test_booking_stats_without_bookings() -> None:
    stats = await booking_service.booking_stats(
        InMemoryBookingRepository(), tenant_id=TENANT_ID, today=MONDAY
    )

    assert (stats.today_count, stats.week_count, stats.total) == (0, 0, 0)
    assert stats.cancellation_rate == 0.0
