"""
Reservation engine.

Owns the FREE -> TAKEN -> FREE transitions of a time slot. Each operation
runs as one transaction on the session it is handed: either the reservation
row and the slot flag change together, or nothing changes.

Concurrent bookings of the same slot are serialized by the store. The slot
row is read with SELECT ... FOR UPDATE (PostgreSQL blocks the second booker
until the first commits), and the flag is flipped with a conditional UPDATE
so a booker that read a stale "free" value still loses. Serialization and
integrity failures reported by the store during booking surface as
ConflictError.

Cancellation uses the same guard: the reservation is deleted only if its id
still carries the presented token, and the slot is freed only if it is still
taken. A second cancel with the same token, or a stale one that read before
the slot was cancelled and rebooked, affects no rows and gets NotFoundError.
"""

import secrets
from dataclasses import dataclass
from datetime import date, time

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dental_booking.errors import (
    BookingError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from dental_booking.models import Reservation, TimeSlot

logger = structlog.get_logger()

CANCELLATION_TOKEN_BYTES = 16

SERIALIZATION_FAILURE_SQLSTATES = {"40001", "40P01"}


@dataclass(frozen=True)
class BookingResult:
    reservation_id: int
    timeslot_id: int
    cancellation_token: str
    phone: str
    email: str
    date: date
    time: time


@dataclass(frozen=True)
class CancellationResult:
    reservation_id: int
    timeslot_id: int
    phone: str
    email: str
    date: date
    time: time


def generate_cancellation_token() -> str:
    """128 random bits, hex encoded"""
    return secrets.token_hex(CANCELLATION_TOKEN_BYTES)


def _is_serialization_failure(exc: DBAPIError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) in SERIALIZATION_FAILURE_SQLSTATES:
        return True
    if getattr(orig, "pgcode", None) in SERIALIZATION_FAILURE_SQLSTATES:
        return True
    # SQLite reports a lost write-lock race this way
    return "database is locked" in str(orig)


async def create_reservation(
    db: AsyncSession,
    *,
    phone: str,
    email: str,
    timeslot_id: int,
) -> BookingResult:
    """Reserve a free slot and issue its cancellation token"""
    if not phone or not email or not timeslot_id:
        raise ValidationError("Missing required fields.")

    logger.info("Creating reservation", timeslot_id=timeslot_id, phone=phone[-4:])

    try:
        result = await db.execute(
            select(TimeSlot)
            .where(TimeSlot.id == timeslot_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        slot = result.scalar_one_or_none()

        if slot is None:
            raise NotFoundError("Time slot does not exist.")

        if slot.is_taken:
            raise ConflictError("Time slot is already taken.")

        claimed = await db.execute(
            update(TimeSlot)
            .where(TimeSlot.id == timeslot_id, TimeSlot.is_taken.is_(False))
            .values(is_taken=True)
        )
        if claimed.rowcount != 1:
            raise ConflictError("Time slot is already taken.")

        reservation = Reservation(
            phone=phone,
            email=email,
            time_slot_id=timeslot_id,
            cancellation_token=generate_cancellation_token(),
        )
        db.add(reservation)
        await db.flush()

        booking = BookingResult(
            reservation_id=reservation.id,
            timeslot_id=timeslot_id,
            cancellation_token=reservation.cancellation_token,
            phone=phone,
            email=email,
            date=slot.date,
            time=slot.time,
        )

        await db.commit()

    except BookingError as e:
        await db.rollback()
        logger.info("Reservation rejected", timeslot_id=timeslot_id, reason=e.message)
        raise

    except IntegrityError as e:
        await db.rollback()
        logger.warning("Reservation lost to a concurrent booking", timeslot_id=timeslot_id, error=str(e))
        raise ConflictError("Time slot is already taken.") from e

    except DBAPIError as e:
        await db.rollback()
        if _is_serialization_failure(e):
            logger.warning("Reservation serialization failure", timeslot_id=timeslot_id, error=str(e))
            raise ConflictError("Time slot is already taken.") from e
        logger.error("Failed to create reservation", timeslot_id=timeslot_id, error=str(e))
        raise InternalError("Reservation failed.") from e

    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to create reservation", timeslot_id=timeslot_id, error=str(e))
        raise InternalError("Reservation failed.") from e

    logger.info(
        "Reservation created",
        reservation_id=booking.reservation_id,
        timeslot_id=timeslot_id,
    )
    return booking


async def cancel_reservation(
    db: AsyncSession,
    *,
    cancellation_token: str,
) -> CancellationResult:
    """Delete the reservation behind a token and free its slot"""
    if not cancellation_token:
        raise ValidationError("Missing cancellation token.")

    try:
        result = await db.execute(
            select(Reservation)
            .where(Reservation.cancellation_token == cancellation_token)
            .with_for_update()
        )
        reservation = result.scalar_one_or_none()

        if reservation is None:
            raise NotFoundError("Reservation does not exist or was already cancelled.")

        result = await db.execute(
            select(TimeSlot)
            .where(TimeSlot.id == reservation.time_slot_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        slot = result.scalar_one_or_none()

        if slot is None:
            logger.error(
                "Reservation references a missing time slot",
                reservation_id=reservation.id,
                timeslot_id=reservation.time_slot_id,
            )
            raise InternalError("Failed to load the reserved time slot.")

        cancellation = CancellationResult(
            reservation_id=reservation.id,
            timeslot_id=slot.id,
            phone=reservation.phone,
            email=reservation.email,
            date=slot.date,
            time=slot.time,
        )

        # Both writes are conditional so a stale or concurrent cancel loses
        deleted = await db.execute(
            delete(Reservation).where(
                Reservation.id == reservation.id,
                Reservation.cancellation_token == cancellation_token,
            )
        )
        if deleted.rowcount != 1:
            raise NotFoundError("Reservation does not exist or was already cancelled.")

        freed = await db.execute(
            update(TimeSlot)
            .where(TimeSlot.id == slot.id, TimeSlot.is_taken.is_(True))
            .values(is_taken=False)
        )
        if freed.rowcount != 1:
            logger.error(
                "Reserved time slot was not marked taken",
                reservation_id=cancellation.reservation_id,
                timeslot_id=cancellation.timeslot_id,
            )
            raise InternalError("Cancellation failed.")

        await db.commit()

    except BookingError:
        await db.rollback()
        raise

    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to cancel reservation", error=str(e))
        raise InternalError("Cancellation failed.") from e

    logger.info(
        "Reservation cancelled",
        reservation_id=cancellation.reservation_id,
        timeslot_id=cancellation.timeslot_id,
    )
    return cancellation
