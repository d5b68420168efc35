from typing import Any, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from labourconnect.core.config import settings
from labourconnect.core.exceptions import LabourConnectError
from labourconnect.schemas.response import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Something went wrong. Please try again."


def error_response(status_code: int, message: str, code: str, details: Optional[Any] = None) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def first_validation_message(errors: list, default: str = "Input validation failed") -> str:
    """
    The banner text for a failed form: the first pydantic message, without
    the "Value error, " prefix pydantic adds to custom validator errors.
    """
    if not errors:
        return default
    message = str(errors[0].get("msg") or default)
    return message[len("Value error, "):] if message.startswith("Value error, ") else message


def add_exception_handlers(app: FastAPI):
    """
    Every failure leaves the app as {success: false, message, code, details}.
    """

    @app.exception_handler(LabourConnectError)
    async def labourconnect_exception_handler(request: Request, exc: LabourConnectError):
        if exc.status_code >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
        return error_response(exc.status_code, exc.message, exc.code, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        return error_response(422, first_validation_message(errors), "VALIDATION_ERROR", errors)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
            exc_info=True
        )
        message = INTERNAL_ERROR_MESSAGE if settings.is_production else str(exc)
        return error_response(500, message, "INTERNAL_ERROR")
