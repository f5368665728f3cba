#!/usr/bin/env python3
"""
Seed script to publish demo time slots for development
"""

import asyncio
from datetime import date, time, timedelta

DAYS_AHEAD = 5
OPENING_HOUR = 8
CLOSING_HOUR = 16


async def seed_demo_slots():
    """Seed demo time slots for the coming working days"""
    from sqlalchemy import select, func

    from dental_booking.database import SessionLocal, engine, Base
    from dental_booking.models import TimeSlot

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        result = await db.execute(select(func.count(TimeSlot.id)))
        existing = result.scalar()

        if existing:
            print(f"{existing} time slots already exist. Skipping...")
            return

        print("Creating demo time slots...")

        created = 0
        day = date.today()
        while created < DAYS_AHEAD * (CLOSING_HOUR - OPENING_HOUR):
            day += timedelta(days=1)

            # Weekdays only
            if day.weekday() >= 5:
                continue

            for hour in range(OPENING_HOUR, CLOSING_HOUR):
                db.add(TimeSlot(date=day, time=time(hour, 0), is_taken=False))
                created += 1

            print(f"  {day.isoformat()}: {CLOSING_HOUR - OPENING_HOUR} slots")

        await db.commit()

        print(f"\nCreated {created} time slots.")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_demo_slots())
