"""Exception handlers that render failures as client-facing JSON envelopes."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokerstats_api.schemas.profile import MessageResponse, ValidationErrorResponse
from pokerstats_api.services.profile import InvalidPasswordError, ProfileNotFoundError
from pokerstats_api.services.validation import ValidationResult

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"


class RequestViolationsError(Exception):
    """Raised by route handlers when a request failed validation."""

    def __init__(self, result: ValidationResult):
        super().__init__(VALIDATION_FAILED)
        self.result = result

    @property
    def violations(self):
        return self.result.violations


def _validation_response(errors: dict[str, str]) -> JSONResponse:
    body = ValidationErrorResponse(message=VALIDATION_FAILED, errors=errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def _message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=MessageResponse(message=message).model_dump())


async def request_violations_handler(request: Request, exc: RequestViolationsError) -> JSONResponse:
    errors = exc.result.errors_by_field()
    logger.warning(
        "HTTP 400 %s %s: validation failed for fields %s",
        request.method,
        request.url.path,
        list(errors),
    )
    return _validation_response(errors)


async def binding_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render structural body errors (wrong JSON types) with the same envelope."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        errors.setdefault(str(loc[-1]), error.get("msg", "Invalid value"))
    logger.warning(
        "HTTP 400 %s %s: malformed request body for fields %s",
        request.method,
        request.url.path,
        list(errors),
    )
    return _validation_response(errors)


async def profile_not_found_handler(request: Request, exc: ProfileNotFoundError) -> JSONResponse:
    logger.warning("HTTP 404 %s %s: %s", request.method, request.url.path, exc)
    return _message_response(status.HTTP_404_NOT_FOUND, str(exc) or "User not found")


async def invalid_password_handler(request: Request, exc: InvalidPasswordError) -> JSONResponse:
    logger.warning("HTTP 400 %s %s: %s", request.method, request.url.path, exc)
    return _message_response(status.HTTP_400_BAD_REQUEST, str(exc) or "Invalid password")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "HTTP 500 %s %s: %s - %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc,
        exc_info=exc,
    )
    return _message_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestViolationsError, request_violations_handler)
    app.add_exception_handler(RequestValidationError, binding_error_handler)
    app.add_exception_handler(ProfileNotFoundError, profile_not_found_handler)
    app.add_exception_handler(InvalidPasswordError, invalid_password_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
