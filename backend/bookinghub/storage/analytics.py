# bookinghub/storage/analytics.py
"""
Aggregations over confirmed room bookings.

The SQL store gets counts, sums and averages from GROUP BY queries, the
in-memory store computes the same totals itself; both then go through the
``*_from_totals`` builders here so rounding and shapes cannot drift apart.
Booked hours are always summed in Python from the slot strings, since date
arithmetic differs per SQL dialect.
"""
from collections import defaultdict
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

from bookinghub.core.scheduling import round_half_up, span_hours
from bookinghub.schemas.analytics import (
    BookingTrend,
    Dashboard,
    DashboardSummary,
    PopularTimeSlot,
    RoomUsageStats,
)

HOURS_PER_WEEK = 24 * 7

# (booking count, revenue in cents, mean attendees/capacity or None)
RoomTotals = Tuple[int, int, Optional[float]]
# (booking count, revenue in cents)
DayTotals = Tuple[int, int]


def booking_hours(booking) -> float:
    return span_hours(booking.start_date, booking.start_time, booking.end_date, booking.end_time)


def start_hour(booking) -> int:
    return int(booking.start_time[:2])


def in_date_range(booking, start_date: Optional[str], end_date: Optional[str]) -> bool:
    if not (start_date and end_date):
        return True
    return booking.start_date >= start_date and booking.end_date <= end_date


def select_confirmed(
    bookings: Iterable,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    room_id: Optional[int] = None,
) -> list:
    return [
        b
        for b in bookings
        if b.status == "confirmed"
        and in_date_range(b, start_date, end_date)
        and (room_id is None or b.room_id == room_id)
    ]


def hours_by(slots: Iterable, key: Callable[[object], Hashable]) -> Dict[Hashable, float]:
    hours: Dict[Hashable, float] = defaultdict(float)
    for slot in slots:
        hours[key(slot)] += booking_hours(slot)
    return hours


def mean_capacity_ratio(bookings: Sequence, capacities: Mapping[int, int]) -> Optional[float]:
    ratios = [
        b.attendee_count / capacities[b.room_id]
        for b in bookings
        if capacities.get(b.room_id)
    ]
    if not ratios:
        return None
    return sum(ratios) / len(ratios)


def occupancy_percent(mean_ratio: Optional[float]) -> float:
    if mean_ratio is None:
        return 0.0
    return round_half_up(mean_ratio * 100, 1)


# ---------------------------------------------------------------------------
# builders shared by both stores
# ---------------------------------------------------------------------------


def usage_from_totals(
    rooms: Sequence,
    totals: Mapping[int, RoomTotals],
    hours: Mapping[int, float],
) -> List[RoomUsageStats]:
    stats = []
    for room in sorted(rooms, key=lambda r: (r.name, r.id)):
        count, revenue, mean_ratio = totals.get(room.id, (0, 0, None))
        room_hours = hours.get(room.id, 0.0)
        stats.append(
            RoomUsageStats(
                room_id=room.id,
                room_name=room.name,
                total_bookings=count,
                total_hours=round_half_up(room_hours, 2),
                total_revenue=revenue,
                utilization_rate=int(round_half_up(room_hours / HOURS_PER_WEEK * 100)),
                average_occupancy=occupancy_percent(mean_ratio),
            )
        )
    return stats


def trends_from_totals(totals: Mapping[str, DayTotals], hours: Mapping[str, float]) -> List[BookingTrend]:
    return [
        BookingTrend(
            date=day,
            booking_count=count,
            revenue=revenue,
            total_hours=round_half_up(hours.get(day, 0.0), 2),
        )
        for day, (count, revenue) in sorted(totals.items())
    ]


def slots_from_counts(counts: Mapping[int, int]) -> List[PopularTimeSlot]:
    total = sum(counts.values())
    return [
        PopularTimeSlot(
            hour=hour,
            booking_count=count,
            utilization=int(round_half_up(count / total * 100)) if total else 0,
        )
        for hour, count in sorted(counts.items())
    ]


# ---------------------------------------------------------------------------
# in-memory totals
# ---------------------------------------------------------------------------


def room_usage(rooms: Sequence, bookings: Sequence) -> List[RoomUsageStats]:
    capacities = {room.id: room.capacity for room in rooms}
    by_room: Dict[int, list] = defaultdict(list)
    for b in bookings:
        by_room[b.room_id].append(b)
    totals = {
        room_id: (
            len(room_bookings),
            sum(b.total_amount for b in room_bookings),
            mean_capacity_ratio(room_bookings, capacities),
        )
        for room_id, room_bookings in by_room.items()
    }
    return usage_from_totals(rooms, totals, hours_by(bookings, lambda b: b.room_id))


def booking_trends(bookings: Sequence) -> List[BookingTrend]:
    totals: Dict[str, DayTotals] = {}
    for b in bookings:
        count, revenue = totals.get(b.start_date, (0, 0))
        totals[b.start_date] = (count + 1, revenue + b.total_amount)
    return trends_from_totals(totals, hours_by(bookings, lambda b: b.start_date))


def popular_time_slots(bookings: Sequence) -> List[PopularTimeSlot]:
    counts: Dict[int, int] = defaultdict(int)
    for b in bookings:
        counts[start_hour(b)] += 1
    return slots_from_counts(counts)


def total_revenue(bookings: Sequence) -> int:
    return sum(b.total_amount for b in bookings)


def occupancy_rate(bookings: Sequence, capacities: Mapping[int, int]) -> float:
    return occupancy_percent(mean_capacity_ratio(bookings, capacities))


def dashboard(
    room_stats: List[RoomUsageStats],
    revenue: int,
    occupancy: float,
    popular_times: List[PopularTimeSlot],
) -> Dashboard:
    return Dashboard(
        summary=DashboardSummary(
            total_revenue=revenue,
            total_bookings=sum(s.total_bookings for s in room_stats),
            total_hours=round_half_up(sum(s.total_hours for s in room_stats), 2),
            average_occupancy_rate=occupancy,
        ),
        room_stats=room_stats,
        popular_times=popular_times,
    )
