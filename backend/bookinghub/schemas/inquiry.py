# bookinghub/schemas/inquiry.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from bookinghub.schemas.base import CamelModel, DateStr


class TravelBookingCreate(CamelModel):
    package_id: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    travel_date: DateStr
    travelers: int = Field(ge=1)
    special_requests: Optional[str] = None


class TravelBookingOut(CamelModel):
    id: str
    package_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    travel_date: str
    travelers: int
    special_requests: Optional[str] = None
    # always "pending" here; confirmation happens outside this service
    status: str = "pending"
    created_at: datetime


class ContactCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    destination: Optional[str] = None
    message: str = Field(min_length=1)


class ContactOut(CamelModel):
    id: str
    name: str
    email: str
    destination: Optional[str] = None
    message: str
    created_at: datetime
