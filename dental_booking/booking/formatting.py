"""Human-readable slot date/time for notifications"""

from datetime import date, datetime, time
from typing import Tuple, Union


def format_slot_date(value: Union[date, str]) -> str:
    """Format as DD/MM/YYYY"""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime("%d/%m/%Y")


def format_slot_time(value: Union[time, str]) -> str:
    """Format as HH:MM, dropping seconds"""
    if isinstance(value, str):
        return value[:5]
    return value.strftime("%H:%M")


def format_slot_datetime(slot_date: Union[date, datetime, str], slot_time: Union[time, str]) -> Tuple[str, str]:
    if isinstance(slot_date, datetime):
        slot_date = slot_date.date()
    return format_slot_date(slot_date), format_slot_time(slot_time)
