"""Normalized schedule model built from raw tenant configuration.

Tenant settings are edited through a loosely-typed settings form and stored as
JSON. Everything in this module turns that raw data into immutable values the
slot generator can rely on. Malformed entries are dropped, never raised: a
broken settings record must reduce availability, not take the booking page
down.

Weekdays use the stored-configuration convention ``0 = Sunday … 6 = Saturday``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Final

logger = logging.getLogger(__name__)

MINUTES_PER_DAY: Final = 24 * 60
SUNDAY: Final = 0
SATURDAY: Final = 6

DEFAULT_SLOT_MINUTES: Final = 30
DEFAULT_BUFFER_MINUTES: Final = 0


def to_minutes(moment: time) -> int:
    """Return minutes since midnight for ``moment`` (seconds are ignored)."""
    return moment.hour * 60 + moment.minute


def from_minutes(minutes: int) -> time:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single day")
    return time(minutes // 60, minutes % 60)


def schedule_weekday(day: date) -> int:
    """Map a calendar date onto the ``0 = Sunday`` weekday numbering."""
    return (day.weekday() + 1) % 7


@dataclass(slots=True, frozen=True)
class TimeRange:
    """Same-day opening window ``[start, end)``."""

    start: time
    end: time

    @property
    def start_minute(self) -> int:
        return to_minutes(self.start)

    @property
    def end_minute(self) -> int:
        return to_minutes(self.end)


@dataclass(slots=True, frozen=True)
class VacationRange:
    """Closed period, inclusive on both ends; ``end=None`` means one day."""

    start: date
    end: date | None = None
    note: str | None = None

    @property
    def last_day(self) -> date:
        return self.end or self.start

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.last_day


@dataclass(slots=True, frozen=True)
class SlotPolicy:
    """Bookable unit length and mandatory idle time around bookings."""

    slot_minutes: int = DEFAULT_SLOT_MINUTES
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES

    def __post_init__(self) -> None:
        if self.slot_minutes <= 0:
            raise ValueError("slot_minutes must be positive")
        if self.buffer_minutes < 0:
            raise ValueError("buffer_minutes must not be negative")


WeeklyHours = Mapping[int, tuple[TimeRange, ...]]

DEFAULT_WORK_DAYS: Final[frozenset[int]] = frozenset({1, 2, 3, 4, 5})
DEFAULT_HOURS: Final[dict[int, tuple[TimeRange, ...]]] = {
    1: (TimeRange(time(9, 0), time(17, 0)),),
    2: (TimeRange(time(9, 0), time(17, 0)),),
    3: (TimeRange(time(9, 0), time(17, 0)),),
    4: (TimeRange(time(9, 0), time(17, 0)),),
    5: (TimeRange(time(9, 0), time(15, 0)),),
}


@dataclass(slots=True, frozen=True)
class ScheduleModel:
    """Everything needed to compute one tenant's bookable grid."""

    weekly_hours: WeeklyHours
    work_days: frozenset[int]
    policy: SlotPolicy = field(default_factory=SlotPolicy)
    vacations: tuple[VacationRange, ...] = ()
    holidays: frozenset[date] = frozenset()

    def is_day_off(self, day: date) -> bool:
        """True when ``day`` is a holiday or inside a vacation range."""
        if day in self.holidays:
            return True
        return any(vacation.contains(day) for vacation in self.vacations)

    def is_closed_on(self, day: date) -> bool:
        """True when nothing can be booked on ``day`` whatever the bookings."""
        return self.is_day_off(day) or not self.ranges_for(day)

    def ranges_for(self, day: date) -> tuple[TimeRange, ...]:
        """Opening ranges for ``day``'s weekday; empty when it is not a work day."""
        weekday = schedule_weekday(day)
        if weekday not in self.work_days:
            return ()
        return tuple(self.weekly_hours.get(weekday, ()))


def parse_json_setting(value: Any, fallback: Any) -> Any:
    """Decode a stored settings blob, falling back on empty or invalid input.

    JSON columns arrive already decoded; legacy rows hold JSON strings.
    """
    if value is None or value == "":
        return fallback
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            logger.warning("Failed to parse JSON setting; using fallback")
            return fallback
    if value is None:
        return fallback
    return value


def parse_clock(value: Any) -> time | None:
    """Parse ``HH:MM`` (or ``HH:MM:SS``) into a minute-precision time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return None
    return time(hour, minute)


def parse_day(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        # Accept full ISO timestamps from older editors by keeping the date part.
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _coerce_weekday(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        weekday = value
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        weekday = int(value.strip())
    else:
        return None
    if SUNDAY <= weekday <= SATURDAY:
        return weekday
    return None


def _parse_range(entry: Any) -> TimeRange | None:
    if isinstance(entry, TimeRange):
        return entry
    if isinstance(entry, Mapping):
        raw_from, raw_to = entry.get("from"), entry.get("to")
    elif isinstance(entry, (list, tuple)) and len(entry) == 2:
        raw_from, raw_to = entry
    else:
        return None
    start, end = parse_clock(raw_from), parse_clock(raw_to)
    if start is None or end is None or start >= end:
        return None
    return TimeRange(start=start, end=end)


def _range_entries(value: Any) -> list[Any] | None:
    if isinstance(value, (list, tuple)):
        return list(value)
    # Older settings rows store ``{"open": [["09:00", "12:00"], ...]}``.
    if isinstance(value, Mapping) and isinstance(value.get("open"), (list, tuple)):
        return list(value["open"])
    return None


def normalize_weekly_hours(raw: Any) -> dict[int, tuple[TimeRange, ...]]:
    """Coerce raw weekly hours into ``{weekday: (TimeRange, ...)}``.

    Ranges are kept in their stored order and are not merged; the slot
    generator sorts and de-duplicates.
    """
    if not isinstance(raw, Mapping):
        return {}
    collected: dict[int, list[TimeRange]] = {}
    for key, value in raw.items():
        weekday = _coerce_weekday(key)
        entries = _range_entries(value)
        if weekday is None or entries is None:
            logger.debug("Dropping weekly hours entry %r", key)
            continue
        ranges = collected.setdefault(weekday, [])
        for entry in entries:
            parsed = _parse_range(entry)
            if parsed is None:
                logger.debug(
                    "Dropping malformed range %r for weekday %s", entry, weekday
                )
                continue
            ranges.append(parsed)
    return {weekday: tuple(ranges) for weekday, ranges in sorted(collected.items())}


def normalize_work_days(raw: Any) -> frozenset[int]:
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
        return frozenset()
    days = {_coerce_weekday(value) for value in raw}
    days.discard(None)
    return frozenset(days)  # type: ignore[arg-type]


def normalize_vacation_ranges(raw: Any) -> tuple[VacationRange, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    vacations: list[VacationRange] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        start = parse_day(entry.get("start"))
        if start is None:
            logger.debug("Dropping vacation range without start: %r", entry)
            continue
        end = parse_day(entry.get("end"))
        if end is not None and end < start:
            logger.debug("Dropping inverted vacation range: %r", entry)
            continue
        note = entry.get("note")
        note_text = str(note).strip() if note is not None else ""
        vacations.append(VacationRange(start=start, end=end, note=note_text or None))
    return tuple(vacations)


def _coerce_minutes(value: Any, *, minimum: int) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= minimum else None


def build_slot_policy(slot_minutes: Any, buffer_minutes: Any) -> SlotPolicy:
    """Build a policy, replacing out-of-range values with the defaults."""
    slot = _coerce_minutes(slot_minutes, minimum=1)
    buffer = _coerce_minutes(buffer_minutes, minimum=0)
    if slot is None and slot_minutes is not None:
        logger.debug("Ignoring invalid slot length %r", slot_minutes)
    if buffer is None and buffer_minutes is not None:
        logger.debug("Ignoring invalid buffer %r", buffer_minutes)
    return SlotPolicy(
        slot_minutes=DEFAULT_SLOT_MINUTES if slot is None else slot,
        buffer_minutes=DEFAULT_BUFFER_MINUTES if buffer is None else buffer,
    )


def build_schedule_model(
    *,
    hours: Any = None,
    work_days: Any = None,
    vacation_days: Any = None,
    holidays: Iterable[date] = (),
    slot_minutes: Any = None,
    buffer_minutes: Any = None,
) -> ScheduleModel:
    """Compose a schedule model from raw settings values.

    Empty weekly hours or work days fall back to the built-in business-hours
    template so a freshly created tenant is bookable straight away.
    """
    weekly_hours = normalize_weekly_hours(parse_json_setting(hours, {}))
    days = normalize_work_days(parse_json_setting(work_days, []))
    vacations = normalize_vacation_ranges(parse_json_setting(vacation_days, []))
    return ScheduleModel(
        weekly_hours=weekly_hours or dict(DEFAULT_HOURS),
        work_days=days or DEFAULT_WORK_DAYS,
        policy=build_slot_policy(slot_minutes, buffer_minutes),
        vacations=vacations,
        holidays=frozenset(holidays),
    )


__all__ = [
    "DEFAULT_HOURS",
    "DEFAULT_WORK_DAYS",
    "ScheduleModel",
    "SlotPolicy",
    "TimeRange",
    "VacationRange",
    "build_schedule_model",
    "build_slot_policy",
    "from_minutes",
    "normalize_vacation_ranges",
    "normalize_weekly_hours",
    "normalize_work_days",
    "parse_clock",
    "parse_day",
    "parse_json_setting",
    "schedule_weekday",
    "to_minutes",
]
