"""Reservation model"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey

from dental_booking.database import Base


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Patient contact information
    phone = Column(String(32), nullable=False)
    email = Column(String(255), nullable=False)

    # At most one reservation per slot
    time_slot_id = Column(Integer, ForeignKey("time_slots.id"), nullable=False, unique=True)

    # Sole credential needed to cancel
    cancellation_token = Column(String(64), nullable=False, unique=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

