"""Domain errors raised by the service layer.

They subclass ``ValueError`` so routers can keep translating service failures
the same way for every resource.
"""

from __future__ import annotations


class TenantNotFoundError(ValueError):
    """No tenant is registered under the requested slug or id."""


class TenantExistsError(ValueError):
    """A tenant with the requested slug already exists."""


class BookingNotFoundError(ValueError):
    """The booking does not exist for the tenant."""


class InvalidStatusTransitionError(ValueError):
    """The requested booking status change is not allowed."""


class HolidayExistsError(ValueError):
    """The date is already registered as a holiday."""


class HolidayNotFoundError(ValueError):
    """The holiday does not exist for the tenant."""
