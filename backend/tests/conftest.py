import pytest
from fastapi.testclient import TestClient

from bookinghub.core.config import Settings
from bookinghub.db.session import build_engine
from bookinghub.main import create_app
from bookinghub.storage.database import DatabaseRoomStorage, DatabaseVacationStorage
from bookinghub.storage.memory import MemoryRoomStorage, MemoryVacationStorage


def make_settings(variant: str) -> Settings:
    return Settings(APP_VARIANT=variant, STORAGE_BACKEND="memory", SEED_DATA=True, LOG_LEVEL="WARNING")


@pytest.fixture(params=["memory", "database"])
def vacation_client(request, tmp_path):
    if request.param == "memory":
        storage = MemoryVacationStorage(seed=True)
    else:
        storage = DatabaseVacationStorage(build_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"), seed=True)
    # startup initializes (and seeds) the store on the client's event loop
    with TestClient(create_app(make_settings("vacations"), storage)) as client:
        yield client


@pytest.fixture(params=["memory", "database"])
def room_client(request, tmp_path):
    if request.param == "memory":
        storage = MemoryRoomStorage(seed=True)
    else:
        storage = DatabaseRoomStorage(build_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}"), seed=True)
    with TestClient(create_app(make_settings("rooms"), storage)) as client:
        yield client


@pytest.fixture(params=["memory", "database"])
async def room_storage(request, tmp_path):
    if request.param == "memory":
        storage = MemoryRoomStorage(seed=True)
    else:
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'rooms.db'}")
        storage = DatabaseRoomStorage(engine, seed=True)
    await storage.initialize()
    yield storage
    await storage.close()


@pytest.fixture(params=["memory", "database"])
async def vacation_storage(request, tmp_path):
    if request.param == "memory":
        storage = MemoryVacationStorage(seed=True)
    else:
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'vacations.db'}")
        storage = DatabaseVacationStorage(engine, seed=True)
    await storage.initialize()
    yield storage
    await storage.close()


def booking_payload(**overrides) -> dict:
    """camelCase request body for Boardroom A (room 1 in the seed data)."""
    payload = {
        "roomId": 1,
        "title": "Quarterly planning",
        "organizerName": "Dana Scott",
        "organizerEmail": "dana@example.com",
        "attendeeCount": 6,
        "startDate": "2025-03-10",
        "endDate": "2025-03-10",
        "startTime": "09:00",
        "endTime": "11:00",
    }
    payload.update(overrides)
    return payload


def booking_data(**overrides) -> dict:
    """snake_case storage input, as produced by BookingCreate.model_dump()."""
    data = {
        "room_id": 1,
        "title": "Quarterly planning",
        "description": None,
        "organizer_name": "Dana Scott",
        "organizer_email": "dana@example.com",
        "organizer_phone": None,
        "attendee_count": 6,
        "start_date": "2025-03-10",
        "end_date": "2025-03-10",
        "start_time": "09:00",
        "end_time": "11:00",
        "status": "confirmed",
        "special_requests": None,
        "equipment": [],
    }
    data.update(overrides)
    return data
