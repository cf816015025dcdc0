# bookinghub/api/routers/analytics.py
"""
Read-only reports over confirmed bookings. Prices are cents, rates percent.
"""
import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from bookinghub.api.dependencies import DateRange, date_range, get_room_storage, required_date_range
from bookinghub.schemas.analytics import (
    BookingTrend,
    Dashboard,
    OccupancyOut,
    PopularTimeSlot,
    RevenueOut,
    RoomUsageStats,
)
from bookinghub.storage import analytics
from bookinghub.storage.base import RoomStorage

router = APIRouter()


@router.get("/room-usage", response_model=List[RoomUsageStats])
async def room_usage(
    dates: DateRange = Depends(date_range),
    storage: RoomStorage = Depends(get_room_storage),
):
    return await storage.get_room_usage_stats(dates.start_date, dates.end_date)


@router.get("/booking-trends", response_model=List[BookingTrend])
async def booking_trends(
    dates: DateRange = Depends(required_date_range),
    storage: RoomStorage = Depends(get_room_storage),
):
    return await storage.get_booking_trends(dates.start_date, dates.end_date)


@router.get("/popular-times", response_model=List[PopularTimeSlot])
async def popular_times(storage: RoomStorage = Depends(get_room_storage)):
    return await storage.get_popular_time_slots()


@router.get("/revenue", response_model=RevenueOut)
async def revenue(
    dates: DateRange = Depends(date_range),
    storage: RoomStorage = Depends(get_room_storage),
):
    total = await storage.get_total_revenue(dates.start_date, dates.end_date)
    return RevenueOut(total_revenue=total)


@router.get("/occupancy", response_model=OccupancyOut)
async def occupancy(
    room_id: Optional[int] = Query(None, alias="roomId"),
    dates: DateRange = Depends(date_range),
    storage: RoomStorage = Depends(get_room_storage),
):
    rate = await storage.get_occupancy_rate(room_id, dates.start_date, dates.end_date)
    return OccupancyOut(occupancy_rate=rate)


@router.get("/dashboard", response_model=Dashboard)
async def dashboard(
    dates: DateRange = Depends(date_range),
    storage: RoomStorage = Depends(get_room_storage),
):
    room_stats, total, rate, slots = await asyncio.gather(
        storage.get_room_usage_stats(dates.start_date, dates.end_date),
        storage.get_total_revenue(dates.start_date, dates.end_date),
        storage.get_occupancy_rate(None, dates.start_date, dates.end_date),
        storage.get_popular_time_slots(),
    )
    return analytics.dashboard(room_stats, total, rate, slots)
