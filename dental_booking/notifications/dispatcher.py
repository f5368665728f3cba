"""
Hand notifications off after a booking transaction has committed.

The API layer schedules these methods as response background tasks, so they
run after the client already has its answer. With Celery enabled the work is
queued by task name; otherwise the task body runs inline. Either way a
failure is logged and dropped: the reservation stands regardless.
"""

import structlog

from dental_booking.booking.engine import BookingResult, CancellationResult
from dental_booking.booking.formatting import format_slot_datetime
from dental_booking.config import settings

logger = structlog.get_logger()


class NotificationDispatcher:
    """Fire-and-forget delivery of booking notifications"""

    def __init__(self, use_celery: bool = True):
        self.use_celery = use_celery

    def booking_confirmed(self, booking: BookingResult) -> None:
        date, time = format_slot_datetime(booking.date, booking.time)
        self._dispatch(
            "send_booking_confirmation",
            kwargs={
                "email": booking.email,
                "phone": booking.phone,
                "date": date,
                "time": time,
                "cancellation_token": booking.cancellation_token,
            },
            reservation_id=booking.reservation_id,
        )

    def reservation_cancelled(self, cancellation: CancellationResult) -> None:
        date, time = format_slot_datetime(cancellation.date, cancellation.time)
        self._dispatch(
            "send_cancellation_notice",
            kwargs={
                "email": cancellation.email,
                "phone": cancellation.phone,
                "date": date,
                "time": time,
            },
            reservation_id=cancellation.reservation_id,
        )

    def _dispatch(self, task_name: str, kwargs: dict, reservation_id: int) -> None:
        try:
            if self.use_celery:
                from dental_booking.jobs.celery_app import celery_app

                celery_app.send_task(task_name, kwargs=kwargs)
            else:
                from dental_booking.jobs import tasks

                getattr(tasks, task_name)(**kwargs)
        except Exception as e:
            logger.error(
                "Failed to dispatch notification",
                task=task_name,
                reservation_id=reservation_id,
                error=str(e),
            )
            return

        logger.info("Notification dispatched", task=task_name, reservation_id=reservation_id)


_dispatcher = NotificationDispatcher(use_celery=settings.notifications_via_celery)


def get_notifier() -> NotificationDispatcher:
    """FastAPI dependency; tests override it"""
    return _dispatcher
