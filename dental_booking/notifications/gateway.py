"""Outbound email (SMTP) and SMS (Twilio). Best-effort: nothing here raises."""

import smtplib
from email.message import EmailMessage

from twilio.rest import Client as TwilioClient
import structlog

from dental_booking.config import settings

logger = structlog.get_logger()


def mask_email(address: str) -> str:
    """Keep the first character and the domain: j***@example.com"""
    local, sep, domain = address.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def send_email(to: str, subject: str, body: str) -> bool:
    """Send a plain-text email; returns whether the server accepted it"""
    from_email = settings.smtp_from_email or settings.smtp_username

    if not settings.smtp_host or not from_email:
        logger.warning("Email not configured, skipping", subject=subject)
        return False

    msg = EmailMessage()
    msg["From"] = from_email
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(body)

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as server:
            if settings.smtp_use_tls:
                server.starttls()
            if settings.smtp_username and settings.smtp_password:
                server.login(settings.smtp_username, settings.smtp_password)
            server.send_message(msg)
    except Exception as e:
        masked = mask_email(to)
        logger.error("Failed to send email", to=masked, subject=subject, error=str(e).replace(to, masked))
        return False

    logger.info("Email sent", to=mask_email(to), subject=subject)
    return True


def send_sms(to: str, body: str) -> bool:
    """Send an SMS from the clinic number; returns whether Twilio accepted it"""
    if not settings.twilio_account_sid or not settings.twilio_phone_number:
        logger.warning("SMS not configured, skipping", to=to[-4:])
        return False

    try:
        client = TwilioClient(settings.twilio_account_sid, settings.twilio_auth_token)
        message = client.messages.create(
            body=body,
            from_=settings.twilio_phone_number,
            to=to,
        )
    except Exception as e:
        logger.error("Failed to send SMS", to=to[-4:], error=str(e))
        return False

    logger.info("SMS sent", to=to[-4:], message_sid=message.sid)
    return True
