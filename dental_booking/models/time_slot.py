"""Time slot model"""

from sqlalchemy import Column, Integer, Date, Time, Boolean, UniqueConstraint

from dental_booking.database import Base


class TimeSlot(Base):
    """Bookable date/time unit at the clinic"""
    __tablename__ = "time_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)

    # True iff a reservation currently holds this slot
    is_taken = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("date", "time", name="uq_time_slots_date_time"),
    )
