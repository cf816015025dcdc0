# bookinghub/core/errors.py
"""
Application exceptions and the handlers that turn them into JSON responses.

Storage backends raise these; routers either let them bubble up to the
handlers registered here or raise HTTPException directly for simple cases.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class RoomNotFoundError(NotFoundError):
    message = "Conference room not found"

    def __init__(self, room_id: Optional[int] = None):
        super().__init__()
        self.room_id = room_id


class BookingNotFoundError(NotFoundError):
    message = "Booking not found"


class ValidationFailedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request data"


class InvalidTimeSpanError(ValidationFailedError):
    message = "End date and time must be after start date and time"


class RoomUnavailableError(ValidationFailedError):
    message = "Conference room is not available for the selected time slot"

    def __init__(self, room_id: Optional[int] = None):
        super().__init__()
        self.room_id = room_id


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # malformed ids and bodies are client errors: 400, not FastAPI's 422
    errors = jsonable_encoder(exc.errors(), custom_encoder={Exception: str})
    logger.info(
        "%s %s rejected: %d validation error(s)",
        request.method,
        request.url.path,
        len(errors),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
