# errors.py
"""
Error taxonomy shared by every router.

Handlers raise one of the ApiError subclasses below; the handlers registered
by `register_exception_handlers` turn them into `{"message": ...}` (or
`{"error": ...}`) JSON bodies. Clients never see a traceback.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    key = "message"

    def __init__(self, message: str, status_code: int | None = None, key: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if key is not None:
            self.key = key


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredential(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ExternalServiceError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content={exc.key: exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _describe_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )
