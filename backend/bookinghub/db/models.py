# bookinghub/db/models.py

import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    ForeignKey,
    Float,
    Boolean,
    JSON,
)
from sqlalchemy.orm import relationship

from bookinghub.db.base import Base


def _uuid() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Vacation packages
# ---------------------------------------------------------------------------


class Destination(Base):
    __tablename__ = "destinations"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    country = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(512), nullable=False)
    package_count = Column(Integer, nullable=False, default=0)
    # cents
    price_from = Column(Integer, nullable=False)
    featured = Column(Boolean, nullable=False, default=False)


class Package(Base):
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(255), nullable=False)

    # plain reference, not enforced by the database
    destination_id = Column(String(36), nullable=False, index=True)

    description = Column(Text, nullable=False)
    image_url = Column(String(512), nullable=False)
    price = Column(Integer, nullable=False)
    duration = Column(Integer, nullable=False)
    max_guests = Column(Integer, nullable=False)
    rating = Column(Float, nullable=False, default=0)
    type = Column(String(50), nullable=False, index=True)

    # list[str] as JSON in DB
    features = Column(JSON, nullable=False, default=list)
    included = Column(JSON, nullable=False, default=list)
    activities = Column(JSON, nullable=False, default=list)


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(512), nullable=False)
    category = Column(String(100), nullable=False)


class TravelBooking(Base):
    __tablename__ = "travel_bookings"

    id = Column(String(36), primary_key=True, default=_uuid)
    package_id = Column(String(36), nullable=False, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)

    travel_date = Column(String(10), nullable=False)
    travelers = Column(Integer, nullable=False)
    special_requests = Column(Text, nullable=True)

    # "pending" | "confirmed" | "cancelled"
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


# ---------------------------------------------------------------------------
# Conference rooms
# ---------------------------------------------------------------------------


class ConferenceRoom(Base):
    __tablename__ = "conference_rooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amenities = Column(JSON, nullable=False, default=list)

    # cents per hour
    hourly_rate = Column(Integer, nullable=False)
    image_url = Column(String(512), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    bookings = relationship(
        "Booking",
        back_populates="room",
    )


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    room_id = Column(
        Integer,
        ForeignKey("conference_rooms.id"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    organizer_name = Column(String(255), nullable=False)
    organizer_email = Column(String(255), nullable=False)
    organizer_phone = Column(String(50), nullable=True)
    attendee_count = Column(Integer, nullable=False)

    # "YYYY-MM-DD" / "HH:MM", compared as strings
    start_date = Column(String(10), nullable=False, index=True)
    end_date = Column(String(10), nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)

    # cents
    total_amount = Column(Integer, nullable=False)

    # "confirmed" | "cancelled" | "completed"
    status = Column(String(20), nullable=False, default="confirmed", index=True)
    special_requests = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    room = relationship("ConferenceRoom", back_populates="bookings")
    equipment = relationship(
        "BookingEquipment",
        back_populates="booking",
        cascade="all,delete-orphan",
        order_by="BookingEquipment.id",
    )


class BookingEquipment(Base):
    __tablename__ = "booking_equipment"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(
        Integer,
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    equipment_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    booking = relationship("Booking", back_populates="equipment")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
