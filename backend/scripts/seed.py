# scripts/seed.py
"""
Load the fixture catalog and rooms into the configured database.

    cd backend && python -m scripts.seed
"""
import asyncio
import logging

from bookinghub.core.config import get_settings
from bookinghub.core.logging import configure_logging
from bookinghub.db.session import build_engine
from bookinghub.storage.database import DatabaseRoomStorage, DatabaseVacationStorage

logger = logging.getLogger("bookinghub.seed")


async def seed():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    # both variants share one schema; seeding skips stores that already hold data
    for storage_cls in (DatabaseVacationStorage, DatabaseRoomStorage):
        storage = storage_cls(build_engine(settings.DATABASE_URL), seed=True)
        try:
            await storage.initialize()
        finally:
            await storage.close()
    logger.info("seed complete")


if __name__ == '__main__':
    asyncio.run(seed())
