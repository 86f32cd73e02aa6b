"""
Error Types and Handlers

Every failure a request can hit is one of these typed errors. Each one knows
its HTTP status and the JSON envelope the client expects, so route handlers
only raise and the handlers registered here do the conversion:

- Unauthenticated: missing or unknown access token (401)
- ValidationError: bad input such as a short password (400)
- StoreError: the user store failed to read or write (400)
- NotFound: signin credentials did not match (404)
- ProviderError: the route search provider failed (500)

Account endpoints answer with {"response": ..., "success": false}; the track
endpoints answer with {"response": {"error": ..., "status": "error"}}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that are turned into a JSON response."""

    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"response": self.message, "success": False}


class Unauthenticated(ApiError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Please, log in"


class ValidationError(ApiError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class StoreError(ApiError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Could not access the user store"


class NotFound(ApiError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Username or password doesn't match"


class ProviderError(ApiError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Route search failed"

    def to_response(self) -> dict:
        return {"response": {"error": self.message, "status": "error"}}


def register_error_handlers(app: FastAPI) -> None:
    """Register the JSON error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.http_status >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Body/query parsing failures get the same envelope as ValidationError
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        logger.info(f"Validation error on {request.url.path}: {details}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationError(details).to_response(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # Never leak internals to the client
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"response": "An unexpected error occurred", "success": False},
        )
