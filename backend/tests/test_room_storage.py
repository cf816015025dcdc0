"""
Behaviour every RoomStorage must share; runs against the in-memory store and
a throwaway SQLite database.
"""
import asyncio

import pytest

from bookinghub.core.errors import (
    InvalidTimeSpanError,
    RoomNotFoundError,
    RoomUnavailableError,
    ValidationFailedError,
)
from bookinghub.db import crud_analytics
from bookinghub.db.session import build_engine
from bookinghub.schemas.booking import BookingOut
from bookinghub.storage.database import DatabaseRoomStorage

from conftest import booking_data


async def test_listing_rooms_hides_inactive_ones(room_storage):
    active = await room_storage.list_rooms(active_only=True)
    everything = await room_storage.list_rooms()

    assert [r.name for r in active] == ["Boardroom A", "Huddle Room", "Innovation Lab"]
    assert len(everything) == 4
    assert await room_storage.get_room(999) is None


async def test_update_room(room_storage):
    room = await room_storage.update_room(2, {"hourly_rate": 3000, "amenities": ["TV screen", "Whiteboard"]})
    assert room.hourly_rate == 3000
    assert room.amenities == ["TV screen", "Whiteboard"]
    assert room.name == "Huddle Room"
    assert await room_storage.update_room(999, {"name": "Ghost"}) is None


async def test_create_booking_prices_from_room_rate(room_storage):
    room = await room_storage.create_room(
        {"name": "Studio", "capacity": 8, "location": "Floor 4", "hourly_rate": 5000}
    )
    booking = await room_storage.create_booking(
        booking_data(room_id=room.id, equipment=[{"equipment_name": "Projector", "quantity": 1}])
    )

    assert booking.total_amount == 10000
    assert booking.status == "confirmed"
    assert booking.room.name == "Studio"
    assert [e.equipment_name for e in booking.equipment] == ["Projector"]

    fetched = await room_storage.get_booking(booking.id)
    assert fetched.total_amount == 10000
    assert fetched.equipment[0].booking_id == booking.id


async def test_overlapping_booking_is_rejected_and_not_stored(room_storage):
    await room_storage.create_booking(booking_data())

    with pytest.raises(RoomUnavailableError):
        await room_storage.create_booking(booking_data(start_time="10:00", end_time="12:00"))

    assert len(await room_storage.list_bookings()) == 1


async def test_touching_slots_conflict(room_storage):
    await room_storage.create_booking(booking_data(start_time="09:00", end_time="10:00"))
    with pytest.raises(RoomUnavailableError):
        await room_storage.create_booking(booking_data(start_time="10:00", end_time="11:00"))


async def test_other_room_day_or_time_is_free(room_storage):
    await room_storage.create_booking(booking_data())

    await room_storage.create_booking(booking_data(room_id=2, attendee_count=2))
    await room_storage.create_booking(booking_data(start_date="2025-03-11", end_date="2025-03-11"))
    await room_storage.create_booking(booking_data(start_time="11:30", end_time="12:30"))

    assert len(await room_storage.list_bookings()) == 4


async def test_create_booking_errors(room_storage):
    with pytest.raises(RoomNotFoundError):
        await room_storage.create_booking(booking_data(room_id=999))
    with pytest.raises(InvalidTimeSpanError):
        await room_storage.create_booking(booking_data(start_time="11:00", end_time="09:00"))


async def test_cancelled_bookings_free_the_slot(room_storage):
    first = await room_storage.create_booking(booking_data())
    await room_storage.cancel_booking(first.id)

    second = await room_storage.create_booking(booking_data())
    assert second.id != first.id


async def test_cancel_changes_only_status(room_storage):
    booking = await room_storage.create_booking(booking_data())
    before = await room_storage.get_booking(booking.id)

    cancelled = await room_storage.cancel_booking(booking.id)

    assert cancelled.status == "cancelled"
    for field in BookingOut.model_fields:
        if field != "status":
            assert getattr(cancelled, field) == getattr(before, field), field
    assert (await room_storage.get_booking(booking.id)).status == "cancelled"
    assert await room_storage.cancel_booking(999) is None


async def test_update_rechecks_and_reprices(room_storage):
    first = await room_storage.create_booking(booking_data())
    second = await room_storage.create_booking(booking_data(start_time="13:00", end_time="14:00"))

    # extending a booking over its own slot is fine
    grown = await room_storage.update_booking(first.id, {"end_time": "12:00"})
    assert grown.total_amount == 3 * 7500

    with pytest.raises(RoomUnavailableError):
        await room_storage.update_booking(second.id, {"start_time": "11:00"})
    assert (await room_storage.get_booking(second.id)).start_time == "13:00"

    renamed = await room_storage.update_booking(second.id, {"title": "Retro"})
    assert renamed.title == "Retro"
    assert renamed.total_amount == 7500
    assert renamed.updated_at >= second.updated_at

    moved = await room_storage.update_booking(second.id, {"room_id": 3})
    assert moved.room.name == "Innovation Lab"
    assert moved.total_amount == 10000

    assert await room_storage.update_booking(999, {"title": "x"}) is None


async def test_reconfirming_into_a_taken_slot_fails(room_storage):
    old = await room_storage.create_booking(booking_data())
    await room_storage.cancel_booking(old.id)
    await room_storage.create_booking(booking_data())

    with pytest.raises(RoomUnavailableError):
        await room_storage.update_booking(old.id, {"status": "confirmed"})


async def test_update_replaces_equipment(room_storage):
    booking = await room_storage.create_booking(
        booking_data(equipment=[{"equipment_name": "Projector", "quantity": 1}])
    )
    updated = await room_storage.update_booking(
        booking.id,
        {"equipment": [{"equipment_name": "Microphone", "quantity": 2}, {"equipment_name": "Flipchart", "quantity": 1}]},
    )
    assert [(e.equipment_name, e.quantity) for e in updated.equipment] == [("Microphone", 2), ("Flipchart", 1)]


async def test_update_span_is_validated_after_merge(room_storage):
    booking = await room_storage.create_booking(booking_data())
    with pytest.raises(InvalidTimeSpanError):
        await room_storage.update_booking(booking.id, {"end_time": "08:00"})


async def test_check_room_availability(room_storage):
    booking = await room_storage.create_booking(booking_data())

    args = (1, "2025-03-10", "2025-03-10", "10:00", "10:30")
    assert not await room_storage.check_room_availability(*args)
    assert await room_storage.check_room_availability(*args, exclude_booking_id=booking.id)
    assert await room_storage.check_room_availability(2, *args[1:])


async def test_listing_orders_and_filters(room_storage):
    late = await room_storage.create_booking(booking_data(start_date="2025-03-12", end_date="2025-03-12"))
    early = await room_storage.create_booking(booking_data(start_date="2025-03-10", end_date="2025-03-10"))
    spanning = await room_storage.create_booking(
        booking_data(room_id=2, attendee_count=2, start_date="2025-03-11", end_date="2025-03-14")
    )

    newest_first = await room_storage.list_bookings()
    assert [b.id for b in newest_first] == [spanning.id, early.id, late.id]

    by_room = await room_storage.list_bookings_by_room(1)
    assert [b.id for b in by_room] == [late.id, early.id]

    in_range = await room_storage.list_bookings_by_date_range("2025-03-10", "2025-03-12")
    assert [b.id for b in in_range] == [early.id, late.id]
    assert in_range[0].room.name == "Boardroom A"


async def test_concurrent_identical_bookings_only_one_wins(room_storage):
    results = await asyncio.gather(
        *(room_storage.create_booking(booking_data()) for _ in range(5)),
        return_exceptions=True,
    )
    created = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, RoomUnavailableError)]

    assert len(created) == 1
    assert len(rejected) == 4


async def test_stores_sharing_one_database_do_not_double_book(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'shared.db'}"
    stores = [DatabaseRoomStorage(build_engine(url), seed=True) for _ in range(2)]
    for store in stores:
        await store.initialize()
    try:
        results = await asyncio.gather(
            *(store.create_booking(booking_data()) for store in stores for _ in range(3)),
            return_exceptions=True,
        )
        created = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, RoomUnavailableError)]

        assert len(created) == 1
        assert len(rejected) == 5
        assert len(await stores[0].list_bookings()) == 1
        assert len(await stores[1].list_rooms()) == 4
    finally:
        for store in stores:
            await store.close()


async def test_analytics_only_count_confirmed_bookings(room_storage):
    # Boardroom A: 2h with 6 of 12 seats, 1h with 12 of 12
    await room_storage.create_booking(booking_data())
    await room_storage.create_booking(booking_data(attendee_count=12, start_time="14:00", end_time="15:00"))
    # Huddle Room: 3h with 2 of 4, on another day
    await room_storage.create_booking(
        booking_data(room_id=2, attendee_count=2, start_date="2025-03-11", end_date="2025-03-11",
                     start_time="14:00", end_time="17:00")
    )
    dropped = await room_storage.create_booking(booking_data(room_id=3, start_time="08:00", end_time="18:00"))
    await room_storage.cancel_booking(dropped.id)

    stats = {s.room_name: s for s in await room_storage.get_room_usage_stats()}
    assert list(stats) == ["Boardroom A", "Huddle Room", "Innovation Lab", "Training Hall"]

    boardroom = stats["Boardroom A"]
    assert boardroom.total_bookings == 2
    assert boardroom.total_hours == 3.0
    assert boardroom.total_revenue == 3 * 7500
    assert boardroom.utilization_rate == 2  # 3 / 168 h
    assert boardroom.average_occupancy == 75.0
    assert stats["Innovation Lab"].total_bookings == 0
    assert stats["Innovation Lab"].average_occupancy == 0.0

    assert await room_storage.get_total_revenue() == 3 * 7500 + 3 * 2500
    assert await room_storage.get_total_revenue("2025-03-11", "2025-03-11") == 3 * 2500
    assert await room_storage.get_occupancy_rate() == round((50 + 100 + 50) / 3, 1)
    assert await room_storage.get_occupancy_rate(room_id=2) == 50.0

    trends = await room_storage.get_booking_trends("2025-03-01", "2025-03-31")
    assert [(t.date, t.booking_count, t.revenue, t.total_hours) for t in trends] == [
        ("2025-03-10", 2, 22500, 3.0),
        ("2025-03-11", 1, 7500, 3.0),
    ]

    slots = await room_storage.get_popular_time_slots()
    assert [(s.hour, s.booking_count, s.utilization) for s in slots] == [(9, 1, 33), (14, 2, 67)]


async def test_booking_totals_are_grouped_in_sql(tmp_path):
    store = DatabaseRoomStorage(build_engine(f"sqlite+aiosqlite:///{tmp_path / 'totals.db'}"), seed=True)
    await store.initialize()
    try:
        await store.create_booking(booking_data())
        await store.create_booking(booking_data(attendee_count=12, start_time="14:00", end_time="15:00"))
        await store.create_booking(
            booking_data(room_id=2, attendee_count=2, start_date="2025-03-11", end_date="2025-03-11",
                         start_time="14:00", end_time="17:00")
        )
        dropped = await store.create_booking(booking_data(room_id=3, start_time="08:00", end_time="18:00"))
        await store.cancel_booking(dropped.id)

        async with store.session_factory() as db:
            by_room = await crud_analytics.totals_by_room(db)
            by_day = await crud_analytics.totals_by_day(db, "2025-03-01", "2025-03-31")
            by_hour = await crud_analytics.counts_by_start_hour(db)
            march_11_revenue = await crud_analytics.total_revenue(db, "2025-03-11", "2025-03-11")
            huddle_ratio = await crud_analytics.mean_capacity_ratio(db, room_id=2)

        assert by_room == {1: (2, 22500, 0.75), 2: (1, 7500, 0.5)}
        assert by_day == {"2025-03-10": (2, 22500), "2025-03-11": (1, 7500)}
        assert by_hour == {9: 1, 14: 2}
        assert march_11_revenue == 7500
        assert huddle_ratio == 0.5
    finally:
        await store.close()


async def test_users(room_storage):
    user = await room_storage.create_user(
        {"username": "dana", "email": "dana@example.com", "full_name": "Dana Scott", "role": "admin"}
    )
    assert (await room_storage.get_user(user.id)).username == "dana"
    assert (await room_storage.get_user_by_email("dana@example.com")).id == user.id
    assert await room_storage.get_user_by_email("nobody@example.com") is None

    with pytest.raises(ValidationFailedError):
        await room_storage.create_user(
            {"username": "dana", "email": "dana@example.com", "full_name": "Dana Again", "role": "user"}
        )
