"""Schema exports."""

from slotbook.schemas.availability import AvailabilityRead, AvailableSlotRead
from slotbook.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingRejection,
    BookingStatusUpdate,
)
from slotbook.schemas.holiday import HolidayCreate, HolidayRead
from slotbook.schemas.settings import (
    TenantSettingsRead,
    TenantSettingsUpdate,
    TimeRangeSchema,
    VacationRangeSchema,
)
from slotbook.schemas.tenant import TenantCreate, TenantRead

__all__ = [
    "AvailabilityRead",
    "AvailableSlotRead",
    "BookingCreate",
    "BookingRead",
    "BookingRejection",
    "BookingStatusUpdate",
    "HolidayCreate",
    "HolidayRead",
    "TenantCreate",
    "TenantRead",
    "TenantSettingsRead",
    "TenantSettingsUpdate",
    "TimeRangeSchema",
    "VacationRangeSchema",
]
