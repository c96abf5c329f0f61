"""ORM models package export."""

from slotbook.models.booking import BLOCKING_STATUSES, Booking, BookingStatus
from slotbook.models.booking_day_lock import BookingDayLock
from slotbook.models.holiday import Holiday
from slotbook.models.tenant import Tenant
from slotbook.models.tenant_settings import TenantSettings

__all__ = [
    "BLOCKING_STATUSES",
    "Booking",
    "BookingDayLock",
    "BookingStatus",
    "Holiday",
    "Tenant",
    "TenantSettings",
]
