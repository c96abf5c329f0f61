"""Booking conflict predicate shared by the read and write paths."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from datetime import time
from typing import Protocol

from slotbook.models.booking import BLOCKING_STATUSES, BookingStatus
from slotbook.services.schedule_model import to_minutes
from slotbook.services.slot_service import CandidateSlot


class ConflictCheck(str, enum.Enum):
    """Outcome of checking one proposed slot."""

    FREE = "free"
    CONFLICT = "conflict"


class BookedInterval(Protocol):
    """Anything that occupies time on a tenant day (ORM rows, test doubles)."""

    start_time: time
    end_time: time
    status: BookingStatus | str


def _blocked_windows(
    bookings: Iterable[BookedInterval], buffer_minutes: int
) -> list[tuple[int, int]]:
    windows: list[tuple[int, int]] = []
    for booking in bookings:
        if BookingStatus(booking.status) not in BLOCKING_STATUSES:
            continue
        windows.append(
            (
                to_minutes(booking.start_time) - buffer_minutes,
                to_minutes(booking.end_time) + buffer_minutes,
            )
        )
    return windows


def _is_clear(start: int, end: int, windows: Sequence[tuple[int, int]]) -> bool:
    return all(
        end <= busy_start or start >= busy_end for busy_start, busy_end in windows
    )


def is_slot_free(
    start_time: time,
    end_time: time,
    bookings: Iterable[BookedInterval],
    buffer_minutes: int,
) -> bool:
    """Return True when ``[start_time, end_time)`` clears every active booking.

    Each pending or confirmed booking blocks ``[start - buffer, end + buffer)``.
    Touching the edge of a blocked window counts as free.
    """
    windows = _blocked_windows(bookings, buffer_minutes)
    return _is_clear(to_minutes(start_time), to_minutes(end_time), windows)


def filter_available(
    candidates: Iterable[CandidateSlot],
    bookings: Iterable[BookedInterval],
    buffer_minutes: int,
) -> list[CandidateSlot]:
    """Keep the candidates that collide with no active booking, in order."""
    windows = _blocked_windows(bookings, buffer_minutes)
    return [
        slot
        for slot in candidates
        if _is_clear(slot.start_minute, slot.end_minute, windows)
    ]


def check_conflict(
    proposed: CandidateSlot,
    bookings: Iterable[BookedInterval],
    buffer_minutes: int,
) -> ConflictCheck:
    """Apply the availability predicate to one slot about to be written."""
    if is_slot_free(proposed.start, proposed.end, bookings, buffer_minutes):
        return ConflictCheck.FREE
    return ConflictCheck.CONFLICT


__all__ = [
    "BookedInterval",
    "ConflictCheck",
    "check_conflict",
    "filter_available",
    "is_slot_free",
]
