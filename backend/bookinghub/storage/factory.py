# bookinghub/storage/factory.py
import logging

from bookinghub.core.config import Settings
from bookinghub.db.session import build_engine
from bookinghub.storage.base import Storage
from bookinghub.storage.database import DatabaseRoomStorage, DatabaseVacationStorage
from bookinghub.storage.memory import MemoryRoomStorage, MemoryVacationStorage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """
    Pick the store for the configured variant and backend.
    """
    logger.info(
        "using %s storage for the %s site", settings.STORAGE_BACKEND, settings.APP_VARIANT
    )
    if settings.STORAGE_BACKEND == "database":
        engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        if settings.APP_VARIANT == "vacations":
            return DatabaseVacationStorage(engine, seed=settings.SEED_DATA)
        return DatabaseRoomStorage(engine, seed=settings.SEED_DATA)

    if settings.APP_VARIANT == "vacations":
        return MemoryVacationStorage(seed=settings.SEED_DATA)
    return MemoryRoomStorage(seed=settings.SEED_DATA)
