"""Versioned API router."""

from fastapi import APIRouter

from . import availability, bookings, health, holidays, settings, tenants

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(tenants.router, prefix="/tenants", tags=["tenants"])
router.include_router(settings.router, tags=["settings"])
router.include_router(availability.router, tags=["availability"])
router.include_router(bookings.router, tags=["bookings"])
router.include_router(holidays.router, tags=["holidays"])
