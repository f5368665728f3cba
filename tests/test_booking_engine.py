"""Tests for the reservation state machine"""

import re

import pytest
from sqlalchemy import select

from dental_booking.booking.engine import (
    create_reservation,
    cancel_reservation,
    generate_cancellation_token,
)
from dental_booking.errors import ConflictError, InternalError, NotFoundError, ValidationError
from dental_booking.models import Reservation, TimeSlot

from tests.conftest import assert_slot_invariant, reservation_count, slot_state


def test_cancellation_token_is_128_bit_hex():
    token = generate_cancellation_token()

    assert re.fullmatch(r"[0-9a-f]{32}", token)
    assert token != generate_cancellation_token()


@pytest.mark.asyncio
async def test_create_reservation_takes_slot(test_db, free_slot_id):
    booking = await create_reservation(
        test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id
    )

    assert booking.reservation_id is not None
    assert booking.timeslot_id == free_slot_id
    assert len(booking.cancellation_token) >= 32
    assert booking.date.isoformat() == "2024-05-01"
    assert booking.time.strftime("%H:%M:%S") == "09:00:00"

    assert await slot_state(test_db, free_slot_id) is True

    result = await test_db.execute(
        select(Reservation).where(Reservation.id == booking.reservation_id)
    )
    reservation = result.scalar_one()
    assert reservation.phone == "+1555"
    assert reservation.email == "a@b.com"
    assert reservation.time_slot_id == free_slot_id
    assert reservation.cancellation_token == booking.cancellation_token
    assert reservation.created_at is not None

    await assert_slot_invariant(test_db)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "phone,email,timeslot_id",
    [
        ("", "a@b.com", 1),
        (None, "a@b.com", 1),
        ("+1555", "", 1),
        ("+1555", "a@b.com", None),
    ],
)
async def test_create_reservation_requires_all_fields(test_db, free_slot_id, phone, email, timeslot_id):
    with pytest.raises(ValidationError):
        await create_reservation(test_db, phone=phone, email=email, timeslot_id=timeslot_id)

    assert await reservation_count(test_db) == 0
    assert await slot_state(test_db, free_slot_id) is False


@pytest.mark.asyncio
async def test_create_reservation_missing_slot(test_db, free_slot_id):
    with pytest.raises(NotFoundError):
        await create_reservation(test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id + 100)

    assert await reservation_count(test_db) == 0
    await assert_slot_invariant(test_db)


@pytest.mark.asyncio
async def test_booking_taken_slot_conflicts_without_mutation(test_db, free_slot_id):
    first = await create_reservation(test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id)

    with pytest.raises(ConflictError):
        await create_reservation(test_db, phone="+1666", email="c@d.com", timeslot_id=free_slot_id)

    reservations = (await test_db.execute(select(Reservation.id, Reservation.phone))).all()
    assert [(r.id, r.phone) for r in reservations] == [(first.reservation_id, "+1555")]
    assert await slot_state(test_db, free_slot_id) is True
    await assert_slot_invariant(test_db)


@pytest.mark.asyncio
async def test_create_then_cancel_restores_slot(test_db, free_slot_id):
    booking = await create_reservation(test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id)

    cancellation = await cancel_reservation(test_db, cancellation_token=booking.cancellation_token)

    assert cancellation.reservation_id == booking.reservation_id
    assert cancellation.timeslot_id == free_slot_id
    assert cancellation.phone == "+1555"
    assert cancellation.email == "a@b.com"
    assert cancellation.date == booking.date
    assert cancellation.time == booking.time

    assert await slot_state(test_db, free_slot_id) is False
    result = await test_db.execute(
        select(Reservation.id).where(Reservation.time_slot_id == free_slot_id)
    )
    assert result.scalars().all() == []
    await assert_slot_invariant(test_db)


@pytest.mark.asyncio
async def test_cancel_twice_succeeds_once(test_db, free_slot_id):
    booking = await create_reservation(test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id)

    await cancel_reservation(test_db, cancellation_token=booking.cancellation_token)

    with pytest.raises(NotFoundError):
        await cancel_reservation(test_db, cancellation_token=booking.cancellation_token)

    assert await slot_state(test_db, free_slot_id) is False
    await assert_slot_invariant(test_db)


@pytest.mark.asyncio
async def test_cancel_unknown_token_mutates_nothing(test_db, free_slot_id):
    booking = await create_reservation(test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id)

    with pytest.raises(NotFoundError):
        await cancel_reservation(test_db, cancellation_token=generate_cancellation_token())

    assert await reservation_count(test_db) == 1
    assert await slot_state(test_db, free_slot_id) is True
    await assert_slot_invariant(test_db)

    # The real token still works afterwards
    await cancel_reservation(test_db, cancellation_token=booking.cancellation_token)


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", None])
async def test_cancel_requires_token(test_db, token):
    with pytest.raises(ValidationError):
        await cancel_reservation(test_db, cancellation_token=token)


@pytest.mark.asyncio
async def test_cancel_with_missing_slot_is_internal_error(test_db, free_slot_id):
    # Bypass the foreign key to simulate a broken row
    orphan = Reservation(
        phone="+1555",
        email="a@b.com",
        time_slot_id=free_slot_id + 100,
        cancellation_token="orphan-token",
    )
    test_db.add(orphan)
    await test_db.commit()

    with pytest.raises(InternalError):
        await cancel_reservation(test_db, cancellation_token="orphan-token")

    # Rolled back: the orphan is still there
    assert await reservation_count(test_db) == 1


@pytest.mark.asyncio
async def test_rebooking_after_cancel_issues_new_token(test_db, free_slot_id):
    first = await create_reservation(test_db, phone="+1555", email="a@b.com", timeslot_id=free_slot_id)
    await cancel_reservation(test_db, cancellation_token=first.cancellation_token)

    second = await create_reservation(test_db, phone="+1666", email="c@d.com", timeslot_id=free_slot_id)

    assert second.cancellation_token != first.cancellation_token
    assert await slot_state(test_db, free_slot_id) is True

    with pytest.raises(NotFoundError):
        await cancel_reservation(test_db, cancellation_token=first.cancellation_token)

    await assert_slot_invariant(test_db)


@pytest.mark.asyncio
async def test_bookings_on_different_slots_are_independent(test_db, slot_ids):
    for index, slot_id in enumerate(slot_ids):
        await create_reservation(
            test_db, phone=f"+1555{index}", email=f"p{index}@b.com", timeslot_id=slot_id
        )

    taken = (await test_db.execute(select(TimeSlot.is_taken))).scalars().all()
    assert taken == [True] * len(slot_ids)
    assert await reservation_count(test_db) == len(slot_ids)
    await assert_slot_invariant(test_db)
