"""Time slot API endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from dental_booking.booking import slots
from dental_booking.database import get_db
from dental_booking.schemas.reservation import MAX_ROW_ID, MessageResponse
from dental_booking.schemas.time_slot import (
    TimeSlotCreate,
    TimeSlotResponse,
    TimeSlotCreatedResponse,
)

router = APIRouter()


@router.get("/get_all_timeslots", response_model=List[TimeSlotResponse])
async def get_all_timeslots(db: AsyncSession = Depends(get_db)):
    """List every time slot ordered by time of day"""
    return await slots.list_time_slots(db)


@router.post("/create_timeslot", response_model=TimeSlotCreatedResponse)
async def create_timeslot(
    slot_data: TimeSlotCreate,
    db: AsyncSession = Depends(get_db),
):
    """Publish a new free time slot"""
    slot = await slots.create_time_slot(db, slot_date=slot_data.date, slot_time=slot_data.time)
    return TimeSlotCreatedResponse(message="Time slot created.", timeslot_id=slot.id)


@router.delete("/delete_timeslot/{timeslot_id}", response_model=MessageResponse)
async def delete_timeslot(
    timeslot_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    db: AsyncSession = Depends(get_db),
):
    """Delete a time slot that is not reserved"""
    await slots.delete_time_slot(db, timeslot_id)
    return MessageResponse(message="Time slot deleted.")
