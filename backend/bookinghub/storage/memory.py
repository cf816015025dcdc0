# bookinghub/storage/memory.py
"""
Dict-backed stores. Each instance owns its own data; nothing is module
global, so tests and app instances never share state.
"""
import asyncio
import itertools
import logging
import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from bookinghub import fixtures
from bookinghub.core.errors import RoomNotFoundError, RoomUnavailableError, ValidationFailedError
from bookinghub.core.scheduling import (
    compute_total_amount,
    ensure_positive_span,
    needs_availability_check,
    slot_changed,
    slots_conflict,
)
from bookinghub.schemas.analytics import BookingTrend, PopularTimeSlot, RoomUsageStats
from bookinghub.schemas.booking import BookingDetail, BookingOut, EquipmentOut
from bookinghub.schemas.catalog import ActivityOut, DestinationOut, PackageFilters, PackageOut
from bookinghub.schemas.inquiry import ContactOut, TravelBookingOut
from bookinghub.schemas.room import ConferenceRoomOut
from bookinghub.schemas.user import UserOut
from bookinghub.storage import analytics
from bookinghub.storage.base import RoomStorage, VacationStorage

logger = logging.getLogger(__name__)


class MemoryVacationStorage(VacationStorage):
    def __init__(self, seed: bool = False):
        self._destinations: Dict[str, DestinationOut] = {}
        self._packages: Dict[str, PackageOut] = {}
        self._activities: Dict[str, ActivityOut] = {}
        self._bookings: Dict[str, TravelBookingOut] = {}
        self._contacts: Dict[str, ContactOut] = {}
        if seed:
            self.load(fixtures.DESTINATIONS, fixtures.PACKAGES, fixtures.ACTIVITIES)

    def load(
        self,
        destinations: Iterable[dict] = (),
        packages: Iterable[dict] = (),
        activities: Iterable[dict] = (),
    ) -> None:
        for d in destinations:
            record = DestinationOut(**d)
            self._destinations[record.id] = record
        for p in packages:
            record = PackageOut(**p)
            self._packages[record.id] = record
        for a in activities:
            record = ActivityOut(**a)
            self._activities[record.id] = record

    async def list_destinations(self) -> List[DestinationOut]:
        return sorted(self._destinations.values(), key=lambda d: d.name)

    async def get_destination(self, destination_id: str) -> Optional[DestinationOut]:
        return self._destinations.get(destination_id)

    async def list_packages(self, filters: Optional[PackageFilters] = None) -> List[PackageOut]:
        packages = self._packages.values()
        if filters is not None:
            packages = [p for p in packages if filters.matches(p)]
        return sorted(packages, key=lambda p: p.title)

    async def search_packages(self, query: str) -> List[PackageOut]:
        needle = query.lower()
        matches = []
        for p in self._packages.values():
            haystack = [p.title, p.description, p.type]
            destination = self._destinations.get(p.destination_id)
            if destination is not None:
                haystack += [destination.name, destination.country]
            if any(needle in text.lower() for text in haystack):
                matches.append(p)
        return sorted(matches, key=lambda p: p.title)

    async def get_package(self, package_id: str) -> Optional[PackageOut]:
        return self._packages.get(package_id)

    async def list_activities(self) -> List[ActivityOut]:
        return sorted(self._activities.values(), key=lambda a: a.name)

    async def create_booking(self, data: dict) -> TravelBookingOut:
        booking = TravelBookingOut(
            id=str(uuid.uuid4()),
            status="pending",
            created_at=datetime.utcnow(),
            **data,
        )
        self._bookings[booking.id] = booking
        return booking

    async def list_bookings(self) -> List[TravelBookingOut]:
        return sorted(self._bookings.values(), key=lambda b: b.created_at, reverse=True)

    async def create_contact(self, data: dict) -> ContactOut:
        contact = ContactOut(id=str(uuid.uuid4()), created_at=datetime.utcnow(), **data)
        self._contacts[contact.id] = contact
        return contact

    async def list_contacts(self) -> List[ContactOut]:
        return sorted(self._contacts.values(), key=lambda c: c.created_at, reverse=True)


class MemoryRoomStorage(RoomStorage):
    def __init__(self, seed: bool = False):
        self._rooms: Dict[int, ConferenceRoomOut] = {}
        self._bookings: Dict[int, BookingOut] = {}
        self._equipment: Dict[int, List[EquipmentOut]] = {}
        self._users: Dict[int, UserOut] = {}

        self._room_ids = itertools.count(1)
        self._booking_ids = itertools.count(1)
        self._equipment_ids = itertools.count(1)
        self._user_ids = itertools.count(1)

        # check + write for bookings happen under this lock
        self._lock = asyncio.Lock()

        if seed:
            for room in fixtures.ROOMS:
                self._add_room(room)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _add_room(self, data: dict) -> ConferenceRoomOut:
        room = ConferenceRoomOut(id=next(self._room_ids), created_at=datetime.utcnow(), **data)
        self._rooms[room.id] = room
        return room

    def _detail(self, booking: BookingOut) -> BookingDetail:
        return BookingDetail(
            **booking.model_dump(),
            room=self._rooms[booking.room_id],
            equipment=list(self._equipment.get(booking.id, [])),
        )

    def _set_equipment(self, booking_id: int, items: Iterable[dict]) -> None:
        self._equipment[booking_id] = [
            EquipmentOut(id=next(self._equipment_ids), booking_id=booking_id, **item)
            for item in items
        ]

    def _is_available(
        self,
        room_id: int,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        return not any(
            b.room_id == room_id
            and b.status == "confirmed"
            and b.id != exclude_booking_id
            and slots_conflict(b, start_date, end_date, start_time, end_time)
            for b in self._bookings.values()
        )

    # ------------------------------------------------------------------
    # rooms
    # ------------------------------------------------------------------

    async def list_rooms(self, active_only: bool = False) -> List[ConferenceRoomOut]:
        rooms = [r for r in self._rooms.values() if r.is_active or not active_only]
        return sorted(rooms, key=lambda r: (r.name, r.id))

    async def get_room(self, room_id: int) -> Optional[ConferenceRoomOut]:
        return self._rooms.get(room_id)

    async def create_room(self, data: dict) -> ConferenceRoomOut:
        return self._add_room(data)

    async def update_room(self, room_id: int, changes: dict) -> Optional[ConferenceRoomOut]:
        room = self._rooms.get(room_id)
        if room is None:
            return None
        room = room.model_copy(update=changes)
        self._rooms[room_id] = room
        return room

    # ------------------------------------------------------------------
    # bookings
    # ------------------------------------------------------------------

    async def list_bookings(self) -> List[BookingDetail]:
        bookings = sorted(
            self._bookings.values(), key=lambda b: (b.created_at, b.id), reverse=True
        )
        return [self._detail(b) for b in bookings]

    async def list_bookings_by_room(self, room_id: int) -> List[BookingDetail]:
        bookings = sorted(
            (b for b in self._bookings.values() if b.room_id == room_id),
            key=lambda b: (b.start_date, b.start_time, b.id),
            reverse=True,
        )
        return [self._detail(b) for b in bookings]

    async def list_bookings_by_date_range(self, start_date: str, end_date: str) -> List[BookingDetail]:
        bookings = sorted(
            (
                b
                for b in self._bookings.values()
                if b.start_date >= start_date and b.end_date <= end_date
            ),
            key=lambda b: (b.start_date, b.start_time, b.id),
        )
        return [self._detail(b) for b in bookings]

    async def get_booking(self, booking_id: int) -> Optional[BookingDetail]:
        booking = self._bookings.get(booking_id)
        return self._detail(booking) if booking is not None else None

    async def create_booking(self, data: dict) -> BookingDetail:
        data = dict(data)
        equipment = data.pop("equipment", None) or []
        data.setdefault("status", "confirmed")

        async with self._lock:
            room = self._rooms.get(data["room_id"])
            if room is None:
                raise RoomNotFoundError(data["room_id"])
            ensure_positive_span(data["start_date"], data["start_time"], data["end_date"], data["end_time"])
            if data["status"] == "confirmed" and not self._is_available(
                room.id, data["start_date"], data["end_date"], data["start_time"], data["end_time"]
            ):
                logger.warning(
                    "room %s already booked for %s %s - %s %s",
                    room.id, data["start_date"], data["start_time"], data["end_date"], data["end_time"],
                )
                raise RoomUnavailableError(room.id)

            now = datetime.utcnow()
            booking = BookingOut(
                id=next(self._booking_ids),
                total_amount=compute_total_amount(
                    data["start_date"], data["start_time"], data["end_date"], data["end_time"], room.hourly_rate
                ),
                created_at=now,
                updated_at=now,
                **data,
            )
            self._bookings[booking.id] = booking
            self._set_equipment(booking.id, equipment)

        logger.info("booking %s created for room %s", booking.id, room.id)
        return self._detail(booking)

    async def update_booking(self, booking_id: int, changes: dict) -> Optional[BookingDetail]:
        changes = dict(changes)
        equipment = changes.pop("equipment", None)

        async with self._lock:
            current = self._bookings.get(booking_id)
            if current is None:
                return None
            merged = current.model_copy(update=changes)
            room = self._rooms.get(merged.room_id)
            if room is None:
                raise RoomNotFoundError(merged.room_id)
            ensure_positive_span(merged.start_date, merged.start_time, merged.end_date, merged.end_time)
            if needs_availability_check(current, changes) and not self._is_available(
                room.id,
                merged.start_date,
                merged.end_date,
                merged.start_time,
                merged.end_time,
                exclude_booking_id=booking_id,
            ):
                logger.warning("booking %s cannot move: room %s is taken", booking_id, room.id)
                raise RoomUnavailableError(room.id)

            extra = {"updated_at": datetime.utcnow()}
            if slot_changed(current, changes):
                extra["total_amount"] = compute_total_amount(
                    merged.start_date, merged.start_time, merged.end_date, merged.end_time, room.hourly_rate
                )
            updated = merged.model_copy(update=extra)
            self._bookings[booking_id] = updated
            if equipment is not None:
                self._set_equipment(booking_id, equipment)

        logger.info("booking %s updated", booking_id)
        return self._detail(updated)

    async def cancel_booking(self, booking_id: int) -> Optional[BookingOut]:
        async with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                return None
            booking = booking.model_copy(update={"status": "cancelled"})
            self._bookings[booking_id] = booking
        logger.info("booking %s cancelled", booking_id)
        return booking

    async def check_room_availability(
        self,
        room_id: int,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        return self._is_available(room_id, start_date, end_date, start_time, end_time, exclude_booking_id)

    # ------------------------------------------------------------------
    # analytics
    # ------------------------------------------------------------------

    def _capacities(self) -> Dict[int, int]:
        return {room.id: room.capacity for room in self._rooms.values()}

    async def get_room_usage_stats(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[RoomUsageStats]:
        bookings = analytics.select_confirmed(self._bookings.values(), start_date, end_date)
        return analytics.room_usage(list(self._rooms.values()), bookings)

    async def get_booking_trends(self, start_date: str, end_date: str) -> List[BookingTrend]:
        bookings = analytics.select_confirmed(self._bookings.values(), start_date, end_date)
        return analytics.booking_trends(bookings)

    async def get_popular_time_slots(self) -> List[PopularTimeSlot]:
        return analytics.popular_time_slots(analytics.select_confirmed(self._bookings.values()))

    async def get_total_revenue(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> int:
        bookings = analytics.select_confirmed(self._bookings.values(), start_date, end_date)
        return analytics.total_revenue(bookings)

    async def get_occupancy_rate(
        self,
        room_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> float:
        bookings = analytics.select_confirmed(self._bookings.values(), start_date, end_date, room_id)
        return analytics.occupancy_rate(bookings, self._capacities())

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------

    async def get_user(self, user_id: int) -> Optional[UserOut]:
        return self._users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserOut]:
        return next((u for u in self._users.values() if u.email == email), None)

    async def create_user(self, data: dict) -> UserOut:
        for existing in self._users.values():
            if existing.email == data["email"] or existing.username == data["username"]:
                raise ValidationFailedError("User already exists")
        user = UserOut(id=next(self._user_ids), created_at=datetime.utcnow(), **data)
        self._users[user.id] = user
        return user
