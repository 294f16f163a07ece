"""
Exception handlers.

Maps every TodoListError subclass to an HTTP status through one table,
so services raise domain errors and never build HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    TodoListError,
    ValidationError,
)

from .models.errors import ValidationErrorResponse

logger = logging.getLogger(__name__)

# Most specific first; TodoListError is the catch-all
STATUS_BY_ERROR: list[tuple[type[TodoListError], int]] = [
    (ConflictError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ExternalServiceError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (TodoListError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: TodoListError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: TodoListError) -> JSONResponse:
    """Build the JSON response for a domain error."""
    status_code = status_for(exc)
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def todolist_error_handler(request: Request, exc: TodoListError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    body = ValidationErrorResponse(details={"errors": jsonable_encoder(exc.errors())})
    return JSONResponse(
        status_code=422,
        content=body.model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handlers to the app."""
    app.add_exception_handler(TodoListError, todolist_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
