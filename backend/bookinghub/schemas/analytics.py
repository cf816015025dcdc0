# bookinghub/schemas/analytics.py
from typing import List

from bookinghub.schemas.base import CamelModel


class RoomUsageStats(CamelModel):
    room_id: int
    room_name: str
    total_bookings: int
    total_hours: float
    # cents
    total_revenue: int
    # booked hours as a share of one week, in percent
    utilization_rate: int
    # mean attendees / capacity, in percent
    average_occupancy: float


class BookingTrend(CamelModel):
    date: str
    booking_count: int
    revenue: int
    total_hours: float


class PopularTimeSlot(CamelModel):
    hour: int
    booking_count: int
    utilization: int


class RevenueOut(CamelModel):
    total_revenue: int


class OccupancyOut(CamelModel):
    occupancy_rate: float


class DashboardSummary(CamelModel):
    total_revenue: int
    total_bookings: int
    total_hours: float
    average_occupancy_rate: float


class Dashboard(CamelModel):
    summary: DashboardSummary
    room_stats: List[RoomUsageStats]
    popular_times: List[PopularTimeSlot]
