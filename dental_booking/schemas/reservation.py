"""Reservation schemas"""

from typing import Optional
from pydantic import BaseModel, conint

# Ids are 32-bit integer columns
MAX_ROW_ID = 2**31 - 1


class ReservationCreate(BaseModel):
    """Create reservation request; emptiness is checked by the engine"""
    phone: Optional[str] = None
    email: Optional[str] = None
    timeslot_id: Optional[conint(ge=1, le=MAX_ROW_ID)] = None


class ReservationCreatedResponse(BaseModel):
    """Reservation response"""
    message: str
    reservation_id: int
    cancellation_token: str


class ReservationCancel(BaseModel):
    """Cancel reservation request"""
    cancellation_token: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
