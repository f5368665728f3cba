"""Patient-facing notification texts"""

from typing import NamedTuple

from dental_booking.config import settings


class EmailContent(NamedTuple):
    subject: str
    body: str


def cancel_link(cancellation_token: str) -> str:
    return f"{settings.cancel_url_base}?token={cancellation_token}"


def booking_confirmation_email(
    email: str,
    phone: str,
    date: str,
    time: str,
    cancellation_token: str,
) -> EmailContent:
    body = (
        "Hello,\n\n"
        f"Your appointment at {settings.clinic_name} has been confirmed.\n\n"
        f"Date: {date}\n"
        f"Time: {time}\n"
        f"Phone: {phone}\n"
        f"Email: {email}\n\n"
        "If you need to cancel or change the appointment, use this link:\n"
        f"{cancel_link(cancellation_token)}\n\n"
        "We look forward to seeing you!\n"
        f"{settings.clinic_name}"
    )
    return EmailContent(subject=f"Appointment confirmation - {settings.clinic_name}", body=body)


def booking_confirmation_sms(date: str, time: str, cancellation_token: str) -> str:
    return (
        "Your appointment is booked.\n"
        f"Date: {date}\n"
        f"Time: {time}\n"
        f"Cancel: {cancel_link(cancellation_token)}"
    )


def cancellation_email(email: str, phone: str, date: str, time: str) -> EmailContent:
    body = (
        "Hello,\n\n"
        "Your appointment has been cancelled.\n\n"
        f"Date: {date}\n"
        f"Time: {time}\n"
        f"Phone: {phone}\n"
        f"Email: {email}\n\n"
        f"To book a new appointment, use this link: {settings.booking_url}\n\n"
        f"{settings.clinic_name}"
    )
    return EmailContent(subject=f"Appointment cancelled - {settings.clinic_name}", body=body)


def cancellation_sms(date: str, time: str) -> str:
    return (
        "Your appointment has been cancelled.\n"
        f"Date: {date}\n"
        f"Time: {time}\n"
        f"New booking: {settings.booking_url}"
    )
