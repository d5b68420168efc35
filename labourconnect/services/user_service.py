"""
labourconnect/services/user_service.py

Purpose: User data management

- Create user records with server-side defaults
- Partial profile updates
- Lookup by mobile number and by id
- Registration flow (duplicate check, defaults, aggregates)
"""

from typing import Any, Dict

from pymongo.errors import DuplicateKeyError

from labourconnect.core.config import settings
from labourconnect.core.exceptions import DuplicateRegistrationError
from labourconnect.core.logging import LogContext, get_logger
from labourconnect.core.result import Failure, NotFound, Ok, Result
from labourconnect.db.mongo import get_users_collection
from labourconnect.schemas.user import RegistrationRequest, UserType
from labourconnect.services import aggregate_service
from labourconnect.services.gateway import gateway_call, serialize_document, to_object_id
from utils.constants import MSG_ALREADY_REGISTERED, MSG_USER_NOT_FOUND
from utils.time_utils import utc_now_iso

logger = get_logger(__name__)


def user_defaults() -> Dict[str, Any]:
    """
    Fields set by the server on every new user record.
    """
    now = utc_now_iso()
    return {
        "createdAt": now,
        "updatedAt": now,
        "isActive": True,
        "isVerified": False,
        "rating": 0,
        "jobsCompleted": 0,
    }


def build_user_document(request: RegistrationRequest) -> Dict[str, Any]:
    """
    Maps a validated registration onto the stored user fields.

    Customers carry only identity fields; workers and professionals also
    carry their trade details, with blanks filled by defaults.
    """
    data: Dict[str, Any] = {
        "fullName": request.full_name,
        "mobile": request.mobile,
        "userType": request.user_type.value,
        "profileViews": 0,
    }

    if request.user_type != UserType.CUSTOMER:
        data.update({
            "profession": request.profession,
            "experience": request.experience or "",
            "dailyRate": request.daily_rate or settings.DEFAULT_DAILY_RATE,
            "age": request.age or 0,
            "skills": request.skills or "",
            "address": request.address,
            "area": request.area,
            "pincode": request.pincode or "",
            "fatherName": "",
        })

    if request.user_type == UserType.PROFESSIONAL:
        data["workersCount"] = 0

    return data


@gateway_call("adding user")
async def create_user_record(data: Dict[str, Any]) -> Result:
    """
    Inserts a user record.

    Returns:
        Ok({"userId", "user"}) or Failure
    """
    users = get_users_collection()
    document = {**data, **user_defaults()}

    try:
        result = await users.insert_one(document)
    except DuplicateKeyError:
        logger.warning("Active user already exists for mobile", extra={"mobile": data.get("mobile")})
        return Failure(message=MSG_ALREADY_REGISTERED, code="ALREADY_EXISTS")

    user_id = str(result.inserted_id)
    logger.info(f"User created: {user_id}", extra={"user_id": user_id})

    return Ok({"userId": user_id, "user": serialize_document({**document, "_id": result.inserted_id})})


@gateway_call("updating user")
async def update_user_record(user_id: str, data: Dict[str, Any]) -> Result:
    """
    Partial update; only the given fields change, updatedAt is refreshed.
    """
    object_id = to_object_id(user_id)
    if object_id is None:
        return NotFound(MSG_USER_NOT_FOUND)

    users = get_users_collection()
    result = await users.update_one(
        {"_id": object_id},
        {"$set": {**data, "updatedAt": utc_now_iso()}}
    )

    if result.matched_count == 0:
        return NotFound(MSG_USER_NOT_FOUND)

    logger.info("User updated", extra={"user_id": user_id})
    return Ok({"userId": user_id})


@gateway_call("finding user by mobile")
async def find_user_by_mobile(mobile: str) -> Result:
    """
    The active user registered with a mobile. Deactivated records are
    ignored, matching the active-only unique index.
    """
    users = get_users_collection()
    document = await users.find_one({"mobile": mobile, "isActive": True})

    if document is None:
        return NotFound(MSG_USER_NOT_FOUND)

    return Ok(serialize_document(document))


@gateway_call("getting user")
async def get_user(user_id: str) -> Result:
    object_id = to_object_id(user_id)
    if object_id is None:
        return NotFound(MSG_USER_NOT_FOUND)

    users = get_users_collection()
    document = await users.find_one({"_id": object_id})

    if document is None:
        return NotFound(MSG_USER_NOT_FOUND)

    return Ok(serialize_document(document))


async def register_user(request: RegistrationRequest) -> Result:
    """
    Registers a new user.

    Args:
        request: Validated registration form

    Returns:
        Ok({"userId", "user"}) or Failure when the backend call fails

    Raises:
        DuplicateRegistrationError: A user with this mobile already exists
    """
    with LogContext(mobile=request.mobile):
        existing = await find_user_by_mobile(request.mobile)

        if isinstance(existing, Ok):
            raise DuplicateRegistrationError(MSG_ALREADY_REGISTERED)
        if isinstance(existing, Failure):
            return existing

        result = await create_user_record(build_user_document(request))

        if isinstance(result, Failure) and result.code == "ALREADY_EXISTS":
            raise DuplicateRegistrationError(MSG_ALREADY_REGISTERED)

        if isinstance(result, Ok) and request.user_type != UserType.CUSTOMER:
            await aggregate_service.record_trade(request.area, request.profession)

        return result
