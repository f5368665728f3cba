"""Time slot schemas"""

from datetime import date as date_type, time as time_type
from typing import Optional
from pydantic import BaseModel


class TimeSlotCreate(BaseModel):
    """Publish time slot request"""
    date: Optional[date_type] = None
    time: Optional[time_type] = None


class TimeSlotResponse(BaseModel):
    """Time slot response"""
    id: int
    date: date_type
    time: time_type
    is_taken: bool

    class Config:
        from_attributes = True


class TimeSlotCreatedResponse(BaseModel):
    message: str
    timeslot_id: int
