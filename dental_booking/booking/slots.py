"""Slot directory: publish, list and withdraw time slots"""

from datetime import date, time
from typing import List

import structlog
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dental_booking.errors import (
    BookingError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from dental_booking.models import TimeSlot

logger = structlog.get_logger()


async def list_time_slots(db: AsyncSession) -> List[TimeSlot]:
    """All slots ordered by time of day"""
    try:
        result = await db.execute(
            select(TimeSlot).order_by(TimeSlot.time.asc(), TimeSlot.date.asc(), TimeSlot.id.asc())
        )
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error("Failed to load time slots", error=str(e))
        raise InternalError("Failed to load time slots.") from e


async def create_time_slot(db: AsyncSession, *, slot_date: date, slot_time: time) -> TimeSlot:
    if slot_date is None or slot_time is None:
        raise ValidationError("Missing required fields.")

    slot = TimeSlot(date=slot_date, time=slot_time, is_taken=False)
    db.add(slot)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Duplicate time slot", date=str(slot_date), time=str(slot_time))
        raise ConflictError("A time slot with this date and time already exists.") from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to create time slot", date=str(slot_date), time=str(slot_time), error=str(e))
        raise InternalError("Failed to create time slot.") from e

    logger.info("Time slot created", timeslot_id=slot.id, date=str(slot_date), time=str(slot_time))
    return slot


async def delete_time_slot(db: AsyncSession, slot_id: int) -> None:
    """
    Withdraw a free slot.

    The availability check and the delete share one transaction: the row is
    locked while checked, and the DELETE itself requires is_taken = false, so
    a booking committed in between makes the delete fail with ConflictError
    instead of orphaning the reservation.
    """
    logger.info("Deleting time slot", timeslot_id=slot_id)

    try:
        result = await db.execute(
            select(TimeSlot)
            .where(TimeSlot.id == slot_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        slot = result.scalar_one_or_none()

        if slot is None:
            raise NotFoundError("Time slot does not exist.")

        if slot.is_taken:
            raise ConflictError("A taken time slot cannot be deleted. Cancel the reservation first.")

        deleted = await db.execute(
            delete(TimeSlot).where(TimeSlot.id == slot_id, TimeSlot.is_taken.is_(False))
        )
        if deleted.rowcount != 1:
            raise ConflictError("A taken time slot cannot be deleted. Cancel the reservation first.")

        await db.commit()

    except BookingError as e:
        await db.rollback()
        logger.info("Time slot not deleted", timeslot_id=slot_id, reason=e.message)
        raise

    except IntegrityError as e:
        # A reservation row still points at the slot
        await db.rollback()
        logger.warning("Time slot still referenced", timeslot_id=slot_id, error=str(e))
        raise ConflictError("A taken time slot cannot be deleted. Cancel the reservation first.") from e

    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to delete time slot", timeslot_id=slot_id, error=str(e))
        raise InternalError("Failed to delete time slot.") from e

    logger.info("Time slot deleted", timeslot_id=slot_id)
