# bookinghub/api/routers/bookings.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from bookinghub.api.dependencies import DateRange, date_range, get_room_storage
from bookinghub.core.errors import BookingNotFoundError
from bookinghub.schemas.booking import (
    AvailabilityCheck,
    AvailabilityResult,
    BookingCancelled,
    BookingCreate,
    BookingDetail,
    BookingUpdate,
)
from bookinghub.storage.base import RoomStorage

router = APIRouter()


@router.get("/bookings", response_model=List[BookingDetail])
async def list_bookings(
    dates: DateRange = Depends(date_range),
    room_id: Optional[int] = Query(None, alias="roomId"),
    storage: RoomStorage = Depends(get_room_storage),
):
    if dates.given:
        bookings = await storage.list_bookings_by_date_range(dates.start_date, dates.end_date)
        if room_id is not None:
            bookings = [b for b in bookings if b.room_id == room_id]
        return bookings
    if room_id is not None:
        return await storage.list_bookings_by_room(room_id)
    return await storage.list_bookings()


@router.get("/bookings/{booking_id}", response_model=BookingDetail)
async def get_booking(booking_id: int, storage: RoomStorage = Depends(get_room_storage)):
    booking = await storage.get_booking(booking_id)
    if not booking:
        raise BookingNotFoundError()
    return booking


@router.post("/bookings", response_model=BookingDetail, status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    storage: RoomStorage = Depends(get_room_storage),
):
    return await storage.create_booking(body.model_dump())


@router.put("/bookings/{booking_id}", response_model=BookingDetail)
async def update_booking(
    booking_id: int,
    body: BookingUpdate,
    storage: RoomStorage = Depends(get_room_storage),
):
    booking = await storage.update_booking(booking_id, body.changes())
    if not booking:
        raise BookingNotFoundError()
    return booking


@router.delete("/bookings/{booking_id}", response_model=BookingCancelled)
async def cancel_booking(booking_id: int, storage: RoomStorage = Depends(get_room_storage)):
    booking = await storage.cancel_booking(booking_id)
    if not booking:
        raise BookingNotFoundError()
    return BookingCancelled(message="Booking cancelled successfully", booking=booking)


@router.post("/rooms/check-availability", response_model=AvailabilityResult)
async def check_availability(
    body: AvailabilityCheck,
    storage: RoomStorage = Depends(get_room_storage),
):
    available = await storage.check_room_availability(
        body.room_id,
        body.start_date,
        body.end_date,
        body.start_time,
        body.end_time,
        exclude_booking_id=body.exclude_booking_id,
    )
    return AvailabilityResult(available=available)
