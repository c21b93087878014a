from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

from expense_sheets.services.errors import (
    ApplicationError,
    ConfigurationError,
    ExpenseValidationError,
    NetworkError,
    SubmissionError,
    SubmissionInProgressError,
    TransportError,
)

logger = logging.getLogger("expense_sheets.errors")

_SUBMISSION_STATUS = {
    ExpenseValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConfigurationError: status.HTTP_400_BAD_REQUEST,
    SubmissionInProgressError: status.HTTP_409_CONFLICT,
    TransportError: status.HTTP_502_BAD_GATEWAY,
    ApplicationError: status.HTTP_502_BAD_GATEWAY,
    NetworkError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for_error(exc: SubmissionError) -> int:
    for cls in type(exc).__mro__:
        code = _SUBMISSION_STATUS.get(cls)  # type: ignore[arg-type]
        if code is not None:
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def not_found_handler(request: Request, exc):  # type: ignore
    if getattr(exc, "status_code", 404) != 404:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def submission_error_handler(request: Request, exc: SubmissionError):  # type: ignore
    return JSONResponse(
        status_code=status_for_error(exc),
        content={
            "error": exc.kind,
            "detail": exc.message,
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
