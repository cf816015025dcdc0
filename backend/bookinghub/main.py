import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookinghub.api.routers import (
    activities as activities_router,
    analytics as analytics_router,
    bookings as bookings_router,
    conference_rooms as conference_rooms_router,
    destinations as destinations_router,
    inquiries as inquiries_router,
    packages as packages_router,
)
from bookinghub.core.config import Settings, get_settings
from bookinghub.core.errors import register_exception_handlers
from bookinghub.core.logging import configure_logging
from bookinghub.storage.base import Storage
from bookinghub.storage.factory import build_storage

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """
    Build the API for the configured site variant. Tests pass their own
    ``storage``; otherwise one is built from ``settings``.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME)
    app.state.settings = settings
    app.state.storage = storage if storage is not None else build_storage(settings)

    # ---------------------------
    # CORS
    # ---------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ---------------------------
    # Startup / shutdown
    # ---------------------------
    @app.on_event("startup")
    async def on_startup():
        await app.state.storage.initialize()
        logger.info("%s started (%s site)", settings.PROJECT_NAME, settings.APP_VARIANT)

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.storage.close()

    # ---------------------------
    # Routers
    # ---------------------------
    if settings.APP_VARIANT == "vacations":
        app.include_router(destinations_router.router, prefix="/api", tags=["destinations"])
        app.include_router(packages_router.router, prefix="/api", tags=["packages"])
        app.include_router(activities_router.router, prefix="/api", tags=["activities"])
        app.include_router(inquiries_router.router, prefix="/api", tags=["inquiries"])
    else:
        app.include_router(conference_rooms_router.router, prefix="/api", tags=["conference-rooms"])
        app.include_router(bookings_router.router, prefix="/api", tags=["bookings"])
        app.include_router(analytics_router.router, prefix="/api/analytics", tags=["analytics"])

    # ---------------------------
    # Health check
    # ---------------------------
    @app.get("/ping")
    async def ping():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("bookinghub.main:app", host="0.0.0.0", port=8000, reload=True)
