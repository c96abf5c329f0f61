"""Booking persistence with an atomic insert-if-free operation."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from sqlalchemy import Select, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from slotbook.models import (
    BLOCKING_STATUSES,
    Booking,
    BookingDayLock,
    BookingStatus,
)
from slotbook.services.conflict_service import ConflictCheck, check_conflict
from slotbook.services.slot_service import CandidateSlot

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CustomerInfo:
    """Contact details captured with a booking request."""

    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class Created:
    booking: Booking


@dataclass(slots=True, frozen=True)
class Conflict:
    """The slot was taken by another active booking."""


InsertResult = Created | Conflict


class BookingRepository(Protocol):
    """Storage contract used by booking admission and the staff views.

    ``insert_booking`` must re-check conflicts and insert as one critical
    section per ``(tenant_id, day)``: of two concurrent inserts for colliding
    slots at most one may return :class:`Created`.
    """

    async def list_active_bookings(
        self, tenant_id: uuid.UUID, day: date
    ) -> list[Booking]:
        ...

    async def insert_booking(
        self,
        tenant_id: uuid.UUID,
        day: date,
        slot: CandidateSlot,
        customer: CustomerInfo,
        *,
        buffer_minutes: int,
    ) -> InsertResult:
        ...

    async def get_booking(
        self, tenant_id: uuid.UUID, booking_id: uuid.UUID
    ) -> Booking | None:
        ...

    async def set_status(self, booking: Booking, status: BookingStatus) -> Booking:
        ...

    async def list_bookings(
        self,
        tenant_id: uuid.UUID,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        status: BookingStatus | None = None,
    ) -> list[Booking]:
        ...


_UPSERT_BUILDERS: dict[str, Callable[[Any], Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlAlchemyBookingRepository:
    """Booking repository on top of an :class:`AsyncSession`.

    Admissions for one tenant day are serialized by upserting the matching
    ``booking_day_locks`` row before the day's bookings are read: PostgreSQL
    holds that row lock and SQLite its write lock until the transaction ends.
    The partial unique index on active ``(tenant_id, booking_date, start_time)``
    is the backstop; its violation is reported as a conflict too.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_active_bookings(
        self, tenant_id: uuid.UUID, day: date
    ) -> list[Booking]:
        stmt: Select[tuple[Booking]] = (
            select(Booking)
            .where(
                Booking.tenant_id == tenant_id,
                Booking.booking_date == day,
                Booking.status.in_(BLOCKING_STATUSES),
            )
            .order_by(Booking.start_time.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def _claim_day(self, tenant_id: uuid.UUID, day: date) -> None:
        dialect = self._session.get_bind().dialect.name
        builder = _UPSERT_BUILDERS.get(dialect)
        if builder is None:
            raise NotImplementedError(f"No day lock for dialect {dialect!r}")
        stmt = builder(BookingDayLock).values(
            tenant_id=tenant_id, booking_date=day, version=1
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[BookingDayLock.tenant_id, BookingDayLock.booking_date],
            set_={"version": BookingDayLock.version + 1},
        )
        await self._session.execute(stmt)

    async def insert_booking(
        self,
        tenant_id: uuid.UUID,
        day: date,
        slot: CandidateSlot,
        customer: CustomerInfo,
        *,
        buffer_minutes: int,
    ) -> InsertResult:
        await self._claim_day(tenant_id, day)
        existing = await self.list_active_bookings(tenant_id, day)
        if check_conflict(slot, existing, buffer_minutes) is ConflictCheck.CONFLICT:
            # Ends the transaction and releases the day lock.
            await self._session.commit()
            return Conflict()

        booking = Booking(
            tenant_id=tenant_id,
            booking_date=day,
            start_time=slot.start,
            end_time=slot.end,
            status=BookingStatus.PENDING,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            phone=customer.phone,
            notes=customer.notes,
        )
        self._session.add(booking)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            logger.info("Active slot constraint rejected booking on %s", day)
            return Conflict()
        await self._session.refresh(booking)
        return Created(booking)

    async def get_booking(
        self, tenant_id: uuid.UUID, booking_id: uuid.UUID
    ) -> Booking | None:
        booking = await self._session.get(Booking, booking_id)
        if booking is None or booking.tenant_id != tenant_id:
            return None
        return booking

    async def set_status(self, booking: Booking, status: BookingStatus) -> Booking:
        booking.status = status
        await self._session.commit()
        await self._session.refresh(booking)
        return booking

    async def list_bookings(
        self,
        tenant_id: uuid.UUID,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        status: BookingStatus | None = None,
    ) -> list[Booking]:
        stmt: Select[tuple[Booking]] = select(Booking).where(
            Booking.tenant_id == tenant_id
        )
        if date_from is not None:
            stmt = stmt.where(Booking.booking_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Booking.booking_date <= date_to)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = stmt.order_by(Booking.booking_date.asc(), Booking.start_time.asc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


__all__ = [
    "BookingRepository",
    "Conflict",
    "Created",
    "CustomerInfo",
    "InsertResult",
    "SqlAlchemyBookingRepository",
]
