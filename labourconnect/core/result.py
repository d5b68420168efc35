"""
labourconnect/core/result.py

Purpose: Tagged results returned by the backend gateway

- Ok(value): the call succeeded
- NotFound(message): the lookup ran and matched nothing
- Failure(message, code): the backend call failed
- to_envelope() turns any of them into the {success, ...} API shape
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    message: str = "Not found"

    @property
    def success(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    message: str
    code: Optional[str] = None

    @property
    def success(self) -> bool:
        return False


Result = Union[Ok[T], NotFound, Failure]


def to_envelope(result: "Result", key: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """
    Converts a tagged result into the uniform envelope.

    Args:
        result: Ok / NotFound / Failure
        key: Payload key for Ok values that are not dicts (e.g. "user")
        **extra: Additional fields merged into a successful envelope

    Returns:
        {"success": True, ...} or {"success": False, "message": ..., "code": ...}
    """
    if isinstance(result, Ok):
        envelope: Dict[str, Any] = {"success": True}
        if key is not None:
            envelope[key] = result.value
        elif isinstance(result.value, dict):
            envelope.update(result.value)
        envelope.update(extra)
        return envelope

    if isinstance(result, NotFound):
        return {"success": False, "message": result.message, "code": "NOT_FOUND"}

    envelope = {"success": False, "message": result.message}
    if result.code:
        envelope["code"] = result.code
    return envelope
