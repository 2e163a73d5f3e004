"""
Error taxonomy and the global exception handlers that render it.

Every failure reaches the client as ``{"error": <message>}``.  Store
failures pass the underlying driver message through unchanged.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailedError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class ConflictError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resource already exists"


class UnknownUserError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User not found"


class AuthMissingError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Missing credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class CredentialMismatchError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class AuthInvalidError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class StoreError(Exception):
    """Any failure reported by the persistence layer."""


class UniqueViolationError(StoreError):
    """Insert or update would duplicate a column declared unique."""


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def _api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    return _error(exc.status_code, exc.message, exc.headers)


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), exc.headers)


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(problems) or "Invalid request")


async def _store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store error: %s", exc, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(APIError, _api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StoreError, _store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
