"""Database models"""

from dental_booking.models.time_slot import TimeSlot
from dental_booking.models.reservation import Reservation

__all__ = [
    "TimeSlot",
    "Reservation",
]
