"""
Error taxonomy for the API.

Every error carries the HTTP status it maps to and the message returned to
the client as ``{"error": message}``.
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inventory_graph.logging_config import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class ApiError(Exception):
    """Base exception for all errors rendered as a JSON error body."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ApiError):
    """Missing or invalid required field. Never reaches the store."""

    status_code = 400


class NotFoundError(ApiError):
    """No node of the label holds the requested identity."""

    status_code = 404


class ConflictError(ApiError):
    """Another node of the label already holds the requested identity."""

    status_code = 409


class StoreFault(ApiError):
    """Any failure raised by the graph store or its driver."""

    status_code = 500

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE, details: Optional[str] = None):
        super().__init__(message, details)


class UniquenessViolation(StoreFault):
    """The store rejected a write because of a uniqueness constraint."""


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ApiError as its JSON error body."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error=exc.message,
            details=exc.details,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or non-object JSON bodies are client errors, not 422s."""
    return JSONResponse(
        status_code=400,
        content={"error": "Corps de requête JSON invalide"},
    )


def register_exception_handlers(app: FastAPI):
    """Attach the error handlers to the application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
