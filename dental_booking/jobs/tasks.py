"""Background notification tasks"""

import structlog

from dental_booking.jobs.celery_app import celery_app
from dental_booking.notifications import gateway, messages

logger = structlog.get_logger()


@celery_app.task(name="send_booking_confirmation")
def send_booking_confirmation(email: str, phone: str, date: str, time: str, cancellation_token: str):
    """Email and text the patient that the appointment is booked"""
    logger.info("Sending booking confirmation", phone=phone[-4:], date=date, time=time)

    content = messages.booking_confirmation_email(email, phone, date, time, cancellation_token)
    gateway.send_email(email, content.subject, content.body)
    gateway.send_sms(phone, messages.booking_confirmation_sms(date, time, cancellation_token))


@celery_app.task(name="send_cancellation_notice")
def send_cancellation_notice(email: str, phone: str, date: str, time: str):
    """Email and text the patient that the appointment was cancelled"""
    logger.info("Sending cancellation notice", phone=phone[-4:], date=date, time=time)

    content = messages.cancellation_email(email, phone, date, time)
    gateway.send_email(email, content.subject, content.body)
    gateway.send_sms(phone, messages.cancellation_sms(date, time))
