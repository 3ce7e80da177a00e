"""Global exception handlers: the one place errors become HTTP statuses.

    - EmployeeApiError subclasses → status from ``ERROR_STATUS_CODES``
    - RequestValidationError → 400 with a fixed message
    - Exception (catch-all) → 500, never leaks internal details
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from employee_api.core.errors import EmployeeApiError, EmployeeNotFoundError, EmployeeServiceError
from employee_api.models.employee import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[EmployeeApiError], int] = {
    EmployeeNotFoundError: status.HTTP_404_NOT_FOUND,
    EmployeeServiceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def status_code_for(exc: EmployeeApiError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        message=message,
        timestamp=int(time.time() * 1000),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(EmployeeApiError)
    async def employee_error_handler(request: Request, exc: EmployeeApiError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code == status.HTTP_404_NOT_FOUND:
            logger.warning("Employee not found on %s: %s", request.url.path, exc.message)
        else:
            logger.error("Employee service error on %s: %s", request.url.path, exc.message, exc_info=exc)
        return error_response(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request data")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error on %s", request.url.path, exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)
