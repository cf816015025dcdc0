# bookinghub/storage/database.py
"""
SQLAlchemy-backed stores. Every call opens its own AsyncSession from the
factory, so concurrent requests (and the dashboard's parallel queries) never
share a session.
"""
import asyncio
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from bookinghub import fixtures
from bookinghub.core.errors import RoomNotFoundError, RoomUnavailableError, ValidationFailedError
from bookinghub.core.scheduling import (
    SLOT_FIELDS,
    compute_total_amount,
    ensure_positive_span,
    needs_availability_check,
    slot_changed,
)
from bookinghub.db import crud_analytics, crud_bookings, crud_catalog, crud_inquiries, crud_rooms, crud_users
from bookinghub.db.session import begin_write, build_session_factory, create_schema
from bookinghub.schemas.analytics import BookingTrend, PopularTimeSlot, RoomUsageStats
from bookinghub.schemas.booking import BookingDetail, BookingOut
from bookinghub.schemas.catalog import ActivityOut, DestinationOut, PackageFilters, PackageOut
from bookinghub.schemas.inquiry import ContactOut, TravelBookingOut
from bookinghub.schemas.room import ConferenceRoomOut
from bookinghub.schemas.user import UserOut
from bookinghub.storage import analytics
from bookinghub.storage.base import RoomStorage, VacationStorage

logger = logging.getLogger(__name__)


class _DatabaseMixin:
    def __init__(self, engine: AsyncEngine, seed: bool = False):
        self.engine = engine
        self.session_factory = build_session_factory(engine)
        self.seed = seed

    async def initialize(self) -> None:
        await create_schema(self.engine)
        if self.seed:
            await self._seed()

    async def close(self) -> None:
        await self.engine.dispose()

    async def _seed(self) -> None:
        raise NotImplementedError


class DatabaseVacationStorage(_DatabaseMixin, VacationStorage):
    async def _seed(self) -> None:
        async with self.session_factory() as db:
            if await crud_catalog.count_destinations(db):
                return
            await crud_catalog.add_catalog(db, fixtures.DESTINATIONS, fixtures.PACKAGES, fixtures.ACTIVITIES)
        logger.info(
            "seeded %d destinations, %d packages", len(fixtures.DESTINATIONS), len(fixtures.PACKAGES)
        )

    async def list_destinations(self) -> List[DestinationOut]:
        async with self.session_factory() as db:
            rows = await crud_catalog.list_destinations(db)
        return [DestinationOut.model_validate(r) for r in rows]

    async def get_destination(self, destination_id: str) -> Optional[DestinationOut]:
        async with self.session_factory() as db:
            row = await crud_catalog.get_destination(db, destination_id)
        return DestinationOut.model_validate(row) if row else None

    async def list_packages(self, filters: Optional[PackageFilters] = None) -> List[PackageOut]:
        async with self.session_factory() as db:
            rows = await crud_catalog.list_packages(db, filters)
        return [PackageOut.model_validate(r) for r in rows]

    async def search_packages(self, query: str) -> List[PackageOut]:
        async with self.session_factory() as db:
            rows = await crud_catalog.search_packages(db, query)
        return [PackageOut.model_validate(r) for r in rows]

    async def get_package(self, package_id: str) -> Optional[PackageOut]:
        async with self.session_factory() as db:
            row = await crud_catalog.get_package(db, package_id)
        return PackageOut.model_validate(row) if row else None

    async def list_activities(self) -> List[ActivityOut]:
        async with self.session_factory() as db:
            rows = await crud_catalog.list_activities(db)
        return [ActivityOut.model_validate(r) for r in rows]

    async def create_booking(self, data: dict) -> TravelBookingOut:
        async with self.session_factory() as db:
            row = await crud_inquiries.create_travel_booking(db, **data)
        return TravelBookingOut.model_validate(row)

    async def list_bookings(self) -> List[TravelBookingOut]:
        async with self.session_factory() as db:
            rows = await crud_inquiries.list_travel_bookings(db)
        return [TravelBookingOut.model_validate(r) for r in rows]

    async def create_contact(self, data: dict) -> ContactOut:
        async with self.session_factory() as db:
            row = await crud_inquiries.create_contact(db, **data)
        return ContactOut.model_validate(row)

    async def list_contacts(self) -> List[ContactOut]:
        async with self.session_factory() as db:
            rows = await crud_inquiries.list_contacts(db)
        return [ContactOut.model_validate(r) for r in rows]


class DatabaseRoomStorage(_DatabaseMixin, RoomStorage):
    def __init__(self, engine: AsyncEngine, seed: bool = False):
        super().__init__(engine, seed=seed)
        # serializes this instance's own writers before they queue on the database lock
        self._write_lock = asyncio.Lock()

    async def _seed(self) -> None:
        async with self.session_factory() as db:
            if await crud_rooms.count_rooms(db):
                return
            for room in fixtures.ROOMS:
                await crud_rooms.create_room(db, **room)
        logger.info("seeded %d conference rooms", len(fixtures.ROOMS))

    # rooms

    async def list_rooms(self, active_only: bool = False) -> List[ConferenceRoomOut]:
        async with self.session_factory() as db:
            rows = await crud_rooms.list_rooms(db, active_only=active_only)
        return [ConferenceRoomOut.model_validate(r) for r in rows]

    async def get_room(self, room_id: int) -> Optional[ConferenceRoomOut]:
        async with self.session_factory() as db:
            row = await crud_rooms.get_room(db, room_id)
        return ConferenceRoomOut.model_validate(row) if row else None

    async def create_room(self, data: dict) -> ConferenceRoomOut:
        async with self.session_factory() as db:
            row = await crud_rooms.create_room(db, **data)
        return ConferenceRoomOut.model_validate(row)

    async def update_room(self, room_id: int, changes: dict) -> Optional[ConferenceRoomOut]:
        async with self.session_factory() as db:
            row = await crud_rooms.get_room(db, room_id)
            if row is None:
                return None
            row = await crud_rooms.update_room(db, row, changes)
        return ConferenceRoomOut.model_validate(row)

    # bookings

    async def list_bookings(self) -> List[BookingDetail]:
        async with self.session_factory() as db:
            rows = await crud_bookings.list_bookings(db)
            return [BookingDetail.model_validate(r) for r in rows]

    async def list_bookings_by_room(self, room_id: int) -> List[BookingDetail]:
        async with self.session_factory() as db:
            rows = await crud_bookings.list_bookings_by_room(db, room_id)
            return [BookingDetail.model_validate(r) for r in rows]

    async def list_bookings_by_date_range(self, start_date: str, end_date: str) -> List[BookingDetail]:
        async with self.session_factory() as db:
            rows = await crud_bookings.list_bookings_by_date_range(db, start_date, end_date)
            return [BookingDetail.model_validate(r) for r in rows]

    async def get_booking(self, booking_id: int) -> Optional[BookingDetail]:
        async with self.session_factory() as db:
            row = await crud_bookings.get_booking(db, booking_id)
            return BookingDetail.model_validate(row) if row else None

    async def create_booking(self, data: dict) -> BookingDetail:
        data = dict(data)
        equipment = data.pop("equipment", None) or []
        data.setdefault("status", "confirmed")

        async with self._write_lock, self.session_factory() as db:
            # write lock (FOR UPDATE on the room, BEGIN IMMEDIATE on SQLite)
            # is held until create_booking commits
            await begin_write(db)
            room = await crud_rooms.get_room(db, data["room_id"], for_update=True)
            if room is None:
                raise RoomNotFoundError(data["room_id"])
            ensure_positive_span(data["start_date"], data["start_time"], data["end_date"], data["end_time"])

            if data["status"] == "confirmed":
                conflicts = await crud_bookings.find_conflicts(
                    db,
                    room_id=room.id,
                    start_date=data["start_date"],
                    end_date=data["end_date"],
                    start_time=data["start_time"],
                    end_time=data["end_time"],
                )
                if conflicts:
                    logger.warning(
                        "room %s already booked (conflicts with %s)",
                        room.id,
                        [c.id for c in conflicts],
                    )
                    raise RoomUnavailableError(room.id)

            total = compute_total_amount(
                data["start_date"], data["start_time"], data["end_date"], data["end_time"], room.hourly_rate
            )
            row = await crud_bookings.create_booking(db, equipment=equipment, total_amount=total, **data)
            booking = BookingDetail.model_validate(row)

        logger.info("booking %s created for room %s", booking.id, booking.room_id)
        return booking

    async def update_booking(self, booking_id: int, changes: dict) -> Optional[BookingDetail]:
        changes = dict(changes)
        equipment = changes.pop("equipment", None)

        async with self._write_lock, self.session_factory() as db:
            await begin_write(db)
            current = await crud_bookings.get_booking(db, booking_id)
            if current is None:
                return None

            room_id = changes.get("room_id", current.room_id)
            room = await crud_rooms.get_room(db, room_id, for_update=True)
            if room is None:
                raise RoomNotFoundError(room_id)

            slot = {field: changes.get(field, getattr(current, field)) for field in SLOT_FIELDS}
            ensure_positive_span(slot["start_date"], slot["start_time"], slot["end_date"], slot["end_time"])

            if needs_availability_check(current, changes):
                conflicts = await crud_bookings.find_conflicts(db, exclude_booking_id=booking_id, **slot)
                if conflicts:
                    logger.warning("booking %s cannot move: room %s is taken", booking_id, room_id)
                    raise RoomUnavailableError(room_id)

            if slot_changed(current, changes):
                changes["total_amount"] = compute_total_amount(
                    slot["start_date"], slot["start_time"], slot["end_date"], slot["end_time"], room.hourly_rate
                )

            row = await crud_bookings.update_booking(db, current, changes, equipment)
            booking = BookingDetail.model_validate(row)

        logger.info("booking %s updated", booking_id)
        return booking

    async def cancel_booking(self, booking_id: int) -> Optional[BookingOut]:
        async with self.session_factory() as db:
            await begin_write(db)
            row = await crud_bookings.get_booking(db, booking_id)
            if row is None:
                return None
            row = await crud_bookings.cancel_booking(db, row)
            booking = BookingOut.model_validate(row)
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
        async with self.session_factory() as db:
            conflicts = await crud_bookings.find_conflicts(
                db,
                room_id=room_id,
                start_date=start_date,
                end_date=end_date,
                start_time=start_time,
                end_time=end_time,
                exclude_booking_id=exclude_booking_id,
            )
        return not conflicts

    # analytics

    async def get_room_usage_stats(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[RoomUsageStats]:
        async with self.session_factory() as db:
            rooms = await crud_rooms.list_rooms(db)
            totals = await crud_analytics.totals_by_room(db, start_date, end_date)
            slots = await crud_analytics.confirmed_slots(db, start_date, end_date)
            return analytics.usage_from_totals(rooms, totals, analytics.hours_by(slots, lambda s: s.room_id))

    async def get_booking_trends(self, start_date: str, end_date: str) -> List[BookingTrend]:
        async with self.session_factory() as db:
            totals = await crud_analytics.totals_by_day(db, start_date, end_date)
            slots = await crud_analytics.confirmed_slots(db, start_date, end_date)
        return analytics.trends_from_totals(totals, analytics.hours_by(slots, lambda s: s.start_date))

    async def get_popular_time_slots(self) -> List[PopularTimeSlot]:
        async with self.session_factory() as db:
            counts = await crud_analytics.counts_by_start_hour(db)
        return analytics.slots_from_counts(counts)

    async def get_total_revenue(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> int:
        async with self.session_factory() as db:
            return await crud_analytics.total_revenue(db, start_date, end_date)

    async def get_occupancy_rate(
        self,
        room_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> float:
        async with self.session_factory() as db:
            mean_ratio = await crud_analytics.mean_capacity_ratio(db, start_date, end_date, room_id)
        return analytics.occupancy_percent(mean_ratio)

    # users

    async def get_user(self, user_id: int) -> Optional[UserOut]:
        async with self.session_factory() as db:
            row = await crud_users.get_user(db, user_id)
        return UserOut.model_validate(row) if row else None

    async def get_user_by_email(self, email: str) -> Optional[UserOut]:
        async with self.session_factory() as db:
            row = await crud_users.get_user_by_email(db, email)
        return UserOut.model_validate(row) if row else None

    async def create_user(self, data: dict) -> UserOut:
        async with self.session_factory() as db:
            try:
                row = await crud_users.create_user(db, **data)
            except IntegrityError as exc:
                await db.rollback()
                raise ValidationFailedError("User already exists") from exc
        return UserOut.model_validate(row)
