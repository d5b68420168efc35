"""
labourconnect/services/gateway.py

Purpose: Backend gateway boundary

- gateway_call wraps every backend operation so that no driver or network
  exception escapes; failures come back as Failure(message, code)
- Document id helpers (ObjectId <-> string, _id -> id)
- backend_available() decides between the real backend and demo mode
"""

import functools
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, PyMongoError

from labourconnect.core.config import settings
from labourconnect.core.logging import get_logger
from labourconnect.core.result import Failure
from labourconnect.db import mongo

logger = get_logger(__name__)


def gateway_call(operation: str):
    """
    Decorator for backend operations returning a Result.

    Args:
        operation: Human-readable name used in log lines ("adding worker")
    """
    def decorator(func: Callable[..., Awaitable[Any]]):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except DuplicateKeyError as e:
                logger.warning(f"Duplicate key while {operation}: {e}")
                return Failure(message="Record already exists", code="ALREADY_EXISTS")
            except PyMongoError as e:
                logger.error(f"Database error while {operation}: {e}", exc_info=True)
                return Failure(message=str(e), code="DATABASE_ERROR")
            except httpx.TimeoutException:
                logger.error(f"Timeout while {operation}")
                return Failure(message="Request timed out", code="TIMEOUT")
            except httpx.HTTPError as e:
                logger.error(f"Network error while {operation}: {e}", exc_info=True)
                return Failure(message=str(e), code="NETWORK_ERROR")
            except Exception as e:
                logger.error(f"Error {operation}: {e}", exc_info=True)
                return Failure(message=str(e), code="INTERNAL_ERROR")
        return wrapper
    return decorator


def backend_available() -> bool:
    """
    True when operations should hit Mongo; False means demo mode.
    """
    return not settings.DEMO_MODE and mongo.is_connected()


def to_object_id(value: Any) -> Optional[ObjectId]:
    """
    Parses a document id string. Returns None for malformed ids.
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Converts a Mongo document into a JSON-safe record with a string "id".
    """
    if document is None:
        return None

    record: Dict[str, Any] = {}
    for key, value in document.items():
        if key == "_id":
            record["id"] = str(value)
        elif isinstance(value, ObjectId):
            record[key] = str(value)
        elif isinstance(value, datetime):
            record[key] = value.isoformat()
        else:
            record[key] = value
    return record
