# bookinghub/db/crud_bookings.py

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookinghub.db.models import Booking, BookingEquipment


def _with_details(stmt):
    # eager load so pydantic validation never triggers an async lazy load
    return stmt.options(
        selectinload(Booking.room),
        selectinload(Booking.equipment),
    ).execution_options(populate_existing=True)


async def list_bookings(db: AsyncSession) -> List[Booking]:
    stmt = _with_details(select(Booking)).order_by(
        Booking.created_at.desc(), Booking.id.desc()
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_bookings_by_room(db: AsyncSession, room_id: int) -> List[Booking]:
    stmt = (
        _with_details(select(Booking))
        .where(Booking.room_id == room_id)
        .order_by(Booking.start_date.desc(), Booking.start_time.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_bookings_by_date_range(
    db: AsyncSession, start_date: str, end_date: str
) -> List[Booking]:
    """
    Bookings lying entirely inside [start_date, end_date].
    """
    stmt = (
        _with_details(select(Booking))
        .where(Booking.start_date >= start_date)
        .where(Booking.end_date <= end_date)
        .order_by(Booking.start_date.asc(), Booking.start_time.asc(), Booking.id.asc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    res = await db.execute(_with_details(select(Booking)).where(Booking.id == booking_id))
    return res.scalar_one_or_none()


async def find_conflicts(
    db: AsyncSession,
    *,
    room_id: int,
    start_date: str,
    end_date: str,
    start_time: str,
    end_time: str,
    exclude_booking_id: Optional[int] = None,
) -> List[Booking]:
    """
    Confirmed bookings of the room whose date range AND time-of-day range
    both overlap the requested slot. Bounds are inclusive.
    """
    stmt = (
        select(Booking)
        .where(Booking.room_id == room_id)
        .where(Booking.status == "confirmed")
        .where(Booking.start_date <= end_date)
        .where(Booking.end_date >= start_date)
        .where(Booking.start_time <= end_time)
        .where(Booking.end_time >= start_time)
    )
    if exclude_booking_id is not None:
        stmt = stmt.where(Booking.id != exclude_booking_id)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def create_booking(
    db: AsyncSession,
    *,
    equipment: Iterable[dict] = (),
    **values,
) -> Booking:
    now = datetime.utcnow()
    booking = Booking(created_at=now, updated_at=now, **values)
    booking.equipment = [BookingEquipment(**item) for item in equipment]
    db.add(booking)
    await db.commit()
    return await get_booking(db, booking.id)


async def update_booking(
    db: AsyncSession,
    booking: Booking,
    data: dict,
    equipment: Optional[Iterable[dict]] = None,
) -> Booking:
    for k, v in data.items():
        setattr(booking, k, v)
    if equipment is not None:
        booking.equipment = [BookingEquipment(**item) for item in equipment]
    booking.updated_at = datetime.utcnow()
    db.add(booking)
    await db.commit()
    return await get_booking(db, booking.id)


async def cancel_booking(db: AsyncSession, booking: Booking) -> Booking:
    # soft cancel: the row stays, only the status moves
    booking.status = "cancelled"
    db.add(booking)
    await db.commit()
    return await get_booking(db, booking.id)
