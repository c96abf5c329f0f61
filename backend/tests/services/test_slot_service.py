"""Slot grid generation."""

from __future__ import annotations

from datetime import date, time

from slotbook.services.schedule_model import build_schedule_model
from slotbook.services.slot_service import CandidateSlot, find_slot, generate_slots

MONDAY = date(2030, 1, 7)
SATURDAY = date(2030, 1, 12)


def _monday_schedule(ranges, **kwargs):
    return build_schedule_model(hours={"1": ranges}, work_days=[1], **kwargs)


def test_single_range_produces_two_half_hour_slots() -> None:
    schedule = _monday_schedule([{"from": "09:00", "to": "10:00"}])
    assert generate_slots(MONDAY, schedule) == [
        CandidateSlot(time(9, 0), time(9, 30)),
        CandidateSlot(time(9, 30), time(10, 0)),
    ]


def test_partial_trailing_slot_is_not_offered() -> None:
    schedule = _monday_schedule(
        [{"from": "09:00", "to": "10:15"}], slot_minutes=30
    )
    assert [slot.start for slot in generate_slots(MONDAY, schedule)] == [
        time(9, 0),
        time(9, 30),
    ]


def test_buffer_does_not_change_the_grid() -> None:
    plain = _monday_schedule([{"from": "09:00", "to": "11:00"}])
    buffered = _monday_schedule(
        [{"from": "09:00", "to": "11:00"}], buffer_minutes=15
    )
    assert generate_slots(MONDAY, plain) == generate_slots(MONDAY, buffered)


def test_day_outside_work_days_has_no_slots() -> None:
    schedule = build_schedule_model(
        hours={"6": [{"from": "09:00", "to": "12:00"}]}, work_days=[1, 2, 3, 4, 5]
    )
    assert generate_slots(SATURDAY, schedule) == []


def test_work_day_without_hours_has_no_slots() -> None:
    schedule = build_schedule_model(
        hours={"2": [{"from": "09:00", "to": "12:00"}]}, work_days=[1, 2]
    )
    assert generate_slots(MONDAY, schedule) == []


def test_vacation_and_holiday_override_hours() -> None:
    ranges = [{"from": "09:00", "to": "17:00"}]
    on_vacation = _monday_schedule(
        ranges, vacation_days=[{"start": "2030-01-01", "end": "2030-01-10"}]
    )
    on_holiday = _monday_schedule(ranges, holidays=[MONDAY])
    assert generate_slots(MONDAY, on_vacation) == []
    assert generate_slots(MONDAY, on_holiday) == []


def test_overlapping_ranges_are_deduplicated_and_sorted() -> None:
    schedule = _monday_schedule(
        [
            {"from": "10:00", "to": "11:00"},
            {"from": "09:00", "to": "10:30"},
        ]
    )
    starts = [slot.start for slot in generate_slots(MONDAY, schedule)]
    assert starts == [time(9, 0), time(9, 30), time(10, 0), time(10, 30)]


def test_generation_is_idempotent() -> None:
    schedule = _monday_schedule(
        [{"from": "08:00", "to": "12:00"}, {"from": "13:00", "to": "18:00"}],
        slot_minutes=45,
    )
    assert generate_slots(MONDAY, schedule) == generate_slots(MONDAY, schedule)


def test_default_template_monday_has_sixteen_slots() -> None:
    schedule = build_schedule_model()
    slots = generate_slots(MONDAY, schedule)
    assert len(slots) == 16
    assert slots[0] == CandidateSlot(time(9, 0), time(9, 30))
    assert slots[-1] == CandidateSlot(time(16, 30), time(17, 0))


def test_find_slot_requires_exact_grid_match() -> None:
    schedule = _monday_schedule([{"from": "09:00", "to": "10:00"}])
    assert find_slot(
        MONDAY, schedule, start_time=time(9, 30), end_time=time(10, 0)
    ) == CandidateSlot(time(9, 30), time(10, 0))
    assert (
        find_slot(MONDAY, schedule, start_time=time(9, 15), end_time=time(9, 45))
        is None
    )
    assert (
        find_slot(MONDAY, schedule, start_time=time(9, 0), end_time=time(10, 0))
        is None
    )
