"""Reservation engine and slot directory"""

from dental_booking.booking.engine import (
    BookingResult,
    CancellationResult,
    create_reservation,
    cancel_reservation,
    generate_cancellation_token,
)
from dental_booking.booking.slots import (
    list_time_slots,
    create_time_slot,
    delete_time_slot,
)
from dental_booking.booking.formatting import format_slot_datetime

__all__ = [
    "BookingResult",
    "CancellationResult",
    "create_reservation",
    "cancel_reservation",
    "generate_cancellation_token",
    "list_time_slots",
    "create_time_slot",
    "delete_time_slot",
    "format_slot_datetime",
]
