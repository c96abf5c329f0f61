"""Candidate slot generation for a single tenant day."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

from slotbook.services.schedule_model import (
    ScheduleModel,
    from_minutes,
    to_minutes,
)


@dataclass(slots=True, frozen=True)
class CandidateSlot:
    """Bookable window ``[start, end)`` on the tenant-local clock."""

    start: time
    end: time

    @property
    def start_minute(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minute(self) -> int:
        return to_minutes(self.end)


def generate_slots(day: date, schedule: ScheduleModel) -> list[CandidateSlot]:
    """Return the ordered slot grid for ``day``.

    The grid advances by the slot length only. Buffers belong to occupied
    time and are applied by the conflict resolver, so the grid for a day does
    not depend on which bookings already exist.
    """
    if schedule.is_closed_on(day):
        return []
    ranges = schedule.ranges_for(day)

    step = schedule.policy.slot_minutes
    slots: list[CandidateSlot] = []
    seen_starts: set[int] = set()
    for time_range in sorted(ranges, key=lambda item: (item.start, item.end)):
        cursor = time_range.start_minute
        while cursor + step <= time_range.end_minute:
            if cursor not in seen_starts:
                seen_starts.add(cursor)
                slots.append(
                    CandidateSlot(
                        start=from_minutes(cursor),
                        end=from_minutes(cursor + step),
                    )
                )
            cursor += step
    # Overlapping ranges can interleave starts; keep the output chronological.
    slots.sort(key=lambda slot: slot.start)
    return slots


def find_slot(
    day: date,
    schedule: ScheduleModel,
    *,
    start_time: time,
    end_time: time,
) -> CandidateSlot | None:
    """Return the generated slot matching ``[start_time, end_time)`` exactly."""
    wanted = (to_minutes(start_time), to_minutes(end_time))
    for slot in generate_slots(day, schedule):
        if (slot.start_minute, slot.end_minute) == wanted:
            return slot
    return None


__all__ = ["CandidateSlot", "find_slot", "generate_slots"]
