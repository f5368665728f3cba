"""Booking error taxonomy and its HTTP mapping"""

from typing import Optional


class BookingError(Exception):
    """Base error; carries the HTTP status and a client-safe message"""

    status_code: int = 500
    message: str = "Unexpected error."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(BookingError):
    """Missing or malformed input"""

    status_code = 400
    message = "Missing required fields."


class NotFoundError(BookingError):
    """Referenced entity does not exist"""

    status_code = 404
    message = "Not found."


class ConflictError(BookingError):
    """State precondition violated, e.g. the slot is already taken"""

    status_code = 400
    message = "Conflicting state."


class InternalError(BookingError):
    """Store failure or broken consistency; details stay in the server log"""

    status_code = 500
    message = "Internal error."
