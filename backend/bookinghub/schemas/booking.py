# bookinghub/schemas/booking.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import EmailStr, Field, model_validator

from bookinghub.core.scheduling import span_seconds
from bookinghub.schemas.base import CamelModel, DateStr, TimeStr
from bookinghub.schemas.room import ConferenceRoomOut

BookingStatus = Literal["confirmed", "cancelled", "completed"]


class EquipmentCreate(CamelModel):
    equipment_name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class EquipmentOut(CamelModel):
    id: int
    booking_id: int
    equipment_name: str
    quantity: int = 1


class BookingCreate(CamelModel):
    room_id: int
    title: str = Field(min_length=1)
    description: Optional[str] = None
    organizer_name: str = Field(min_length=1)
    organizer_email: EmailStr
    organizer_phone: Optional[str] = None
    attendee_count: int = Field(ge=1)
    start_date: DateStr
    end_date: DateStr
    start_time: TimeStr
    end_time: TimeStr
    status: BookingStatus = "confirmed"
    special_requests: Optional[str] = None
    equipment: List[EquipmentCreate] = []

    @model_validator(mode="after")
    def check_span(self):
        if span_seconds(self.start_date, self.start_time, self.end_date, self.end_time) <= 0:
            raise ValueError("end date and time must be after start date and time")
        return self


class BookingUpdate(CamelModel):
    """
    Partial edit; only fields present in the body are applied.
    The span is validated after merging with the stored booking.
    """

    room_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    organizer_name: Optional[str] = Field(default=None, min_length=1)
    organizer_email: Optional[EmailStr] = None
    organizer_phone: Optional[str] = None
    attendee_count: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[DateStr] = None
    end_date: Optional[DateStr] = None
    start_time: Optional[TimeStr] = None
    end_time: Optional[TimeStr] = None
    status: Optional[BookingStatus] = None
    special_requests: Optional[str] = None
    equipment: Optional[List[EquipmentCreate]] = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        # explicit nulls only clear the optional text fields
        return {
            k: v
            for k, v in data.items()
            if v is not None or k in ("description", "organizer_phone", "special_requests")
        }


class BookingOut(CamelModel):
    id: int
    room_id: int
    title: str
    description: Optional[str] = None
    organizer_name: str
    organizer_email: str
    organizer_phone: Optional[str] = None
    attendee_count: int
    start_date: str
    end_date: str
    start_time: str
    end_time: str
    # cents
    total_amount: int
    status: str
    special_requests: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BookingDetail(BookingOut):
    room: ConferenceRoomOut
    equipment: List[EquipmentOut] = []


class BookingCancelled(CamelModel):
    message: str
    booking: BookingOut


class AvailabilityCheck(CamelModel):
    room_id: int
    start_date: DateStr
    end_date: DateStr
    start_time: TimeStr
    end_time: TimeStr
    exclude_booking_id: Optional[int] = None


class AvailabilityResult(CamelModel):
    available: bool
