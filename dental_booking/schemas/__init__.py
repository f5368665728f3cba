"""Pydantic schemas for request/response validation"""

from dental_booking.schemas.time_slot import (
    TimeSlotCreate,
    TimeSlotResponse,
    TimeSlotCreatedResponse,
)
from dental_booking.schemas.reservation import (
    ReservationCreate,
    ReservationCreatedResponse,
    ReservationCancel,
    MessageResponse,
)

__all__ = [
    "TimeSlotCreate",
    "TimeSlotResponse",
    "TimeSlotCreatedResponse",
    "ReservationCreate",
    "ReservationCreatedResponse",
    "ReservationCancel",
    "MessageResponse",
]
