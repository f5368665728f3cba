"""Test configuration and fixtures"""

from datetime import date, time

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from dental_booking.main import app
from dental_booking.database import Base, get_db
from dental_booking.models import TimeSlot, Reservation
from dental_booking.notifications.dispatcher import get_notifier


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingNotifier:
    """Stands in for the dispatcher and remembers what would have been sent"""

    def __init__(self):
        self.confirmed = []
        self.cancelled = []

    def booking_confirmed(self, booking):
        self.confirmed.append(booking)

    def reservation_cancelled(self, cancellation):
        self.cancelled.append(cancellation)


async def assert_slot_invariant(db: AsyncSession):
    """Every slot is taken iff a reservation references it"""
    slots = (await db.execute(select(TimeSlot.id, TimeSlot.is_taken))).all()
    held = (await db.execute(select(Reservation.time_slot_id))).scalars().all()

    assert len(held) == len(set(held))
    for slot_id, is_taken in slots:
        assert is_taken == (slot_id in held), f"slot {slot_id} is_taken={is_taken}"


async def slot_state(db: AsyncSession, slot_id: int):
    """Current is_taken of a slot straight from the table, None if gone"""
    result = await db.execute(select(TimeSlot.is_taken).where(TimeSlot.id == slot_id))
    return result.scalar_one_or_none()


async def reservation_count(db: AsyncSession) -> int:
    return len((await db.execute(select(Reservation.id))).scalars().all())


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def free_slot_id(test_db):
    """Seed the 2024-05-01 09:00 slot, free"""
    slot = TimeSlot(date=date(2024, 5, 1), time=time(9, 0, 0), is_taken=False)
    test_db.add(slot)
    await test_db.commit()
    return slot.id


@pytest.fixture
async def slot_ids(test_db):
    """Seed several free slots across two days, inserted out of time order"""
    slots = [
        TimeSlot(date=date(2024, 5, 1), time=time(14, 30)),
        TimeSlot(date=date(2024, 5, 2), time=time(8, 0)),
        TimeSlot(date=date(2024, 5, 1), time=time(10, 0)),
        TimeSlot(date=date(2024, 5, 1), time=time(8, 0)),
    ]
    for slot in slots:
        test_db.add(slot)

    await test_db.commit()
    return [slot.id for slot in slots]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(test_db, notifier):
    """Create test client with overridden database and notifier"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
