"""Application errors and their HTTP rendering."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class Unauthorized(AppError):
    status_code = 401
    message = "Unauthorized"


class ValidationFailed(AppError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, details: list[dict], message: str | None = None):
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.details}


class Conflict(AppError):
    status_code = 409
    message = "Conflict"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class Internal(AppError):
    pass


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    from app.schemas import format_errors

    return await app_error_handler(request, ValidationFailed(format_errors(exc.errors())))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return await app_error_handler(request, Internal())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
