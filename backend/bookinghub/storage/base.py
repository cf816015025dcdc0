# bookinghub/storage/base.py
"""
Storage contracts for the two site variants.

Routers only ever talk to these interfaces; which implementation sits behind
them (in-memory or SQL) is decided once at startup, see
``bookinghub.storage.factory.build_storage``.

Lookups by id return ``None`` for unknown ids instead of raising. Writes that
hit a business rule raise the errors from ``bookinghub.core.errors``.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from bookinghub.schemas.analytics import (
    BookingTrend,
    PopularTimeSlot,
    RoomUsageStats,
)
from bookinghub.schemas.booking import BookingDetail, BookingOut
from bookinghub.schemas.catalog import (
    ActivityOut,
    DestinationOut,
    PackageFilters,
    PackageOut,
)
from bookinghub.schemas.inquiry import ContactOut, TravelBookingOut
from bookinghub.schemas.room import ConferenceRoomOut
from bookinghub.schemas.user import UserOut


class Storage(ABC):
    async def initialize(self) -> None:
        """Prepare the backing store (schema, seed data). Idempotent."""

    async def close(self) -> None:
        """Release connections held by the store."""


class VacationStorage(Storage):
    @abstractmethod
    async def list_destinations(self) -> List[DestinationOut]: ...

    @abstractmethod
    async def get_destination(self, destination_id: str) -> Optional[DestinationOut]: ...

    @abstractmethod
    async def list_packages(self, filters: Optional[PackageFilters] = None) -> List[PackageOut]: ...

    @abstractmethod
    async def search_packages(self, query: str) -> List[PackageOut]: ...

    @abstractmethod
    async def get_package(self, package_id: str) -> Optional[PackageOut]: ...

    @abstractmethod
    async def list_activities(self) -> List[ActivityOut]: ...

    @abstractmethod
    async def create_booking(self, data: dict) -> TravelBookingOut: ...

    @abstractmethod
    async def list_bookings(self) -> List[TravelBookingOut]: ...

    @abstractmethod
    async def create_contact(self, data: dict) -> ContactOut: ...

    @abstractmethod
    async def list_contacts(self) -> List[ContactOut]: ...


class RoomStorage(Storage):
    # rooms

    @abstractmethod
    async def list_rooms(self, active_only: bool = False) -> List[ConferenceRoomOut]: ...

    @abstractmethod
    async def get_room(self, room_id: int) -> Optional[ConferenceRoomOut]: ...

    @abstractmethod
    async def create_room(self, data: dict) -> ConferenceRoomOut: ...

    @abstractmethod
    async def update_room(self, room_id: int, changes: dict) -> Optional[ConferenceRoomOut]: ...

    # bookings

    @abstractmethod
    async def list_bookings(self) -> List[BookingDetail]: ...

    @abstractmethod
    async def list_bookings_by_room(self, room_id: int) -> List[BookingDetail]: ...

    @abstractmethod
    async def list_bookings_by_date_range(self, start_date: str, end_date: str) -> List[BookingDetail]: ...

    @abstractmethod
    async def get_booking(self, booking_id: int) -> Optional[BookingDetail]: ...

    @abstractmethod
    async def create_booking(self, data: dict) -> BookingDetail:
        """
        Check availability and insert in one step. ``totalAmount`` is derived
        from the room's hourly rate. Raises RoomNotFoundError,
        InvalidTimeSpanError or RoomUnavailableError.
        """

    @abstractmethod
    async def update_booking(self, booking_id: int, changes: dict) -> Optional[BookingDetail]:
        """
        Merge ``changes`` into the booking. Re-checks availability (ignoring
        the booking itself) when the result is confirmed and its slot moved or
        it was re-confirmed; re-prices when the slot or room changed.
        Returns None for an unknown id.
        """

    @abstractmethod
    async def cancel_booking(self, booking_id: int) -> Optional[BookingOut]: ...

    @abstractmethod
    async def check_room_availability(
        self,
        room_id: int,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[int] = None,
    ) -> bool: ...

    # analytics, confirmed bookings only

    @abstractmethod
    async def get_room_usage_stats(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[RoomUsageStats]: ...

    @abstractmethod
    async def get_booking_trends(self, start_date: str, end_date: str) -> List[BookingTrend]: ...

    @abstractmethod
    async def get_popular_time_slots(self) -> List[PopularTimeSlot]: ...

    @abstractmethod
    async def get_total_revenue(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> int: ...

    @abstractmethod
    async def get_occupancy_rate(
        self,
        room_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> float: ...

    # users, kept for upcoming authentication

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[UserOut]: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserOut]: ...

    @abstractmethod
    async def create_user(self, data: dict) -> UserOut: ...
