"""Reservation API endpoints"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dental_booking.booking import engine
from dental_booking.database import get_db
from dental_booking.notifications.dispatcher import NotificationDispatcher, get_notifier
from dental_booking.schemas.reservation import (
    ReservationCreate,
    ReservationCreatedResponse,
    ReservationCancel,
    MessageResponse,
)

router = APIRouter()


@router.post("/create_reservation", response_model=ReservationCreatedResponse)
async def create_reservation(
    reservation_data: ReservationCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """Reserve a free time slot and notify the patient"""
    booking = await engine.create_reservation(
        db,
        phone=reservation_data.phone,
        email=reservation_data.email,
        timeslot_id=reservation_data.timeslot_id,
    )

    # Runs after the response is sent
    background_tasks.add_task(notifier.booking_confirmed, booking)

    return ReservationCreatedResponse(
        message="Reservation successful!",
        reservation_id=booking.reservation_id,
        cancellation_token=booking.cancellation_token,
    )


@router.post("/cancel_reservation", response_model=MessageResponse)
async def cancel_reservation(
    cancel_data: ReservationCancel,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """Cancel a reservation by its token and free the slot"""
    cancellation = await engine.cancel_reservation(
        db,
        cancellation_token=cancel_data.cancellation_token,
    )

    background_tasks.add_task(notifier.reservation_cancelled, cancellation)

    return MessageResponse(
        message="Reservation cancelled. The time slot is available again.",
    )
