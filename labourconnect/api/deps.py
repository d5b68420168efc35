"""
labourconnect/api/deps.py

Purpose: Shared route dependencies and helpers

- Session context / authentication guards
- Mapping gateway results onto HTTP responses
"""

from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from labourconnect.core.errors import first_validation_message
from labourconnect.core.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from labourconnect.core.result import NotFound, Ok, Result, to_envelope
from labourconnect.services.session_service import SessionContext, load_session
from utils.constants import MSG_PROFESSIONAL_REQUIRED

M = TypeVar("M", bound=BaseModel)

# HTTP status for gateway failure codes; anything else is a bad gateway
FAILURE_STATUS = {
    "NO_PENDING_REQUEST": 400,
    "INVALID_CODE": 400,
    "INVALID_MOBILE": 400,
    "CAPTCHA_FAILED": 400,
    "EXPIRED": 400,
    "INVALID_AREA": 400,
    "INVALID_PROFESSION": 400,
    "ALREADY_EXISTS": 409,
    "DEMO_MODE": 409,
    "NOT_CONFIGURED": 503,
}


def get_session_context(request: Request) -> SessionContext:
    return load_session(request.session)


def require_user(context: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not context.is_authenticated:
        raise AuthenticationError()
    return context


def require_professional(context: SessionContext = Depends(require_user)) -> SessionContext:
    if not context.is_professional:
        raise PermissionDeniedError(MSG_PROFESSIONAL_REQUIRED)
    return context


def result_status(result: Result) -> int:
    if isinstance(result, Ok):
        return 200
    if isinstance(result, NotFound):
        return 404
    return FAILURE_STATUS.get(result.code, 502)


def envelope_response(result: Result, key: Optional[str] = None, **extra: Any) -> JSONResponse:
    """
    Renders a gateway result as {success, ...} with a matching status code.
    Extra fields are added to failures too (e.g. "redirect").
    """
    envelope: Dict[str, Any] = to_envelope(result, key=key, **extra)
    if not isinstance(result, Ok):
        envelope.update(extra)
    return JSONResponse(status_code=result_status(result), content=envelope)


def parse_model(model: Type[M], data: Dict[str, Any]) -> M:
    """
    Validates data outside FastAPI's body parsing (e.g. query strings).

    Raises:
        ValidationError: First validation message, full list in details
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        message = first_validation_message(errors, default="Invalid input")
        raise ValidationError(message, details=errors) from e
