# bookinghub/db/crud_analytics.py
"""
GROUP BY queries over confirmed bookings. Only the slot columns are loaded
row by row (for booked hours); everything else is aggregated in SQL.
"""
from typing import Dict, Optional, Tuple

from sqlalchemy import Float, and_, cast, func, literal_column, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookinghub.db.models import Booking, ConferenceRoom

# attendees / capacity of one booking, as a float on every dialect
_capacity_ratio = cast(Booking.attendee_count, Float) / ConferenceRoom.capacity


def _confirmed_clauses(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    room_id: Optional[int] = None,
) -> list:
    where_clauses = [Booking.status == "confirmed"]
    # a range only counts when both bounds are given
    if start_date and end_date:
        where_clauses.append(Booking.start_date >= start_date)
        where_clauses.append(Booking.end_date <= end_date)
    if room_id is not None:
        where_clauses.append(Booking.room_id == room_id)
    return where_clauses


def _mean(value) -> Optional[float]:
    return float(value) if value is not None else None


async def confirmed_slots(
    db: AsyncSession,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list:
    """(room_id, start_date, start_time, end_date, end_time) rows."""
    stmt = select(
        Booking.room_id,
        Booking.start_date,
        Booking.start_time,
        Booking.end_date,
        Booking.end_time,
    ).where(and_(*_confirmed_clauses(start_date, end_date)))
    res = await db.execute(stmt)
    return list(res.all())


async def totals_by_room(
    db: AsyncSession,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Dict[int, Tuple[int, int, Optional[float]]]:
    stmt = (
        select(
            Booking.room_id,
            func.count(Booking.id),
            func.coalesce(func.sum(Booking.total_amount), 0),
            func.avg(_capacity_ratio),
        )
        .join(ConferenceRoom, ConferenceRoom.id == Booking.room_id)
        .where(and_(*_confirmed_clauses(start_date, end_date)))
        .group_by(Booking.room_id)
    )
    res = await db.execute(stmt)
    return {
        room_id: (int(count), int(revenue), _mean(mean_ratio))
        for room_id, count, revenue, mean_ratio in res.all()
    }


async def totals_by_day(
    db: AsyncSession,
    start_date: str,
    end_date: str,
) -> Dict[str, Tuple[int, int]]:
    stmt = (
        select(
            Booking.start_date,
            func.count(Booking.id),
            func.coalesce(func.sum(Booking.total_amount), 0),
        )
        .where(and_(*_confirmed_clauses(start_date, end_date)))
        .group_by(Booking.start_date)
        .order_by(Booking.start_date.asc())
    )
    res = await db.execute(stmt)
    return {day: (int(count), int(revenue)) for day, count, revenue in res.all()}


async def counts_by_start_hour(db: AsyncSession) -> Dict[int, int]:
    # "HH:MM" -> "HH"; literal offsets so SELECT and GROUP BY render the same
    hour = func.substr(Booking.start_time, literal_column("1"), literal_column("2"))
    stmt = (
        select(hour, func.count(Booking.id))
        .where(and_(*_confirmed_clauses()))
        .group_by(hour)
    )
    res = await db.execute(stmt)
    return {int(h): int(count) for h, count in res.all()}


async def mean_capacity_ratio(
    db: AsyncSession,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    room_id: Optional[int] = None,
) -> Optional[float]:
    stmt = (
        select(func.avg(_capacity_ratio))
        .select_from(Booking)
        .join(ConferenceRoom, ConferenceRoom.id == Booking.room_id)
        .where(and_(*_confirmed_clauses(start_date, end_date, room_id)))
    )
    return _mean((await db.execute(stmt)).scalar_one())


async def total_revenue(
    db: AsyncSession,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> int:
    stmt = select(func.coalesce(func.sum(Booking.total_amount), 0)).where(
        and_(*_confirmed_clauses(start_date, end_date))
    )
    return int((await db.execute(stmt)).scalar_one())

