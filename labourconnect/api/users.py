"""
labourconnect/api/users.py

Purpose: Registration and profile endpoints

- POST  /users                      register (signs the new user in)
- PATCH /users/me                   edit own profile
- POST  /users/me/profile-picture   upload and link a profile picture
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile

from labourconnect.api.deps import envelope_response, require_user
from labourconnect.core.config import settings
from labourconnect.core.exceptions import ValidationError
from labourconnect.core.logging import LogContext, get_logger
from labourconnect.core.result import Ok
from labourconnect.schemas.user import ProfileUpdate, RegistrationRequest
from labourconnect.services import session_service, user_service
from labourconnect.services.gateway import backend_available
from labourconnect.services.session_service import SessionContext
from labourconnect.services.storage_service import profile_picture_storage
from utils.constants import (
    HOME_PAGE_BY_USER_TYPE,
    MSG_ACCOUNT_CREATED,
    MSG_ACCOUNT_CREATED_DEMO,
    MSG_PICTURE_UPLOADED,
    MSG_PROFILE_UPDATED,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
async def register(payload: RegistrationRequest, request: Request):
    """
    Registers a worker, professional or customer and signs them in.

    Duplicate mobiles are rejected with 409 before anything is written.
    """
    with LogContext(mobile=payload.mobile):
        if not backend_available():
            user = session_service.register_demo_user(request.session, payload)
            session_service.login(request.session, user)
            return {
                "success": True,
                "userId": user["id"],
                "user": user,
                "message": MSG_ACCOUNT_CREATED_DEMO,
                "redirect": "home",
            }

        result = await user_service.register_user(payload)
        if not isinstance(result, Ok):
            return envelope_response(result)

        context = session_service.login(request.session, result.value["user"])
        return {
            "success": True,
            "userId": result.value["userId"],
            "user": context.user,
            "message": MSG_ACCOUNT_CREATED,
            "redirect": HOME_PAGE_BY_USER_TYPE.get(context.user_type, "home"),
        }


@router.patch("/me")
async def update_profile(
    payload: ProfileUpdate,
    request: Request,
    context: SessionContext = Depends(require_user)
):
    changes = payload.model_dump(by_alias=True, exclude_none=True)
    if not changes:
        raise ValidationError("Nothing to update")

    with LogContext(user_id=context.user_id):
        if not context.is_demo_user:
            result = await user_service.update_user_record(context.user_id, changes)
            if not isinstance(result, Ok):
                return envelope_response(result)

        updated = session_service.update_current_user(request.session, changes)
        return {"success": True, "message": MSG_PROFILE_UPDATED, "user": updated.user}


@router.post("/me/profile-picture")
async def upload_profile_picture(
    request: Request,
    file: UploadFile = File(...),
    context: SessionContext = Depends(require_user)
):
    """
    Stores the picture under the user's id and links it on the profile.
    """
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise ValidationError("Please upload an image file")

    data = await file.read()
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.PROFILE_PICTURE_MAX_BYTES:
        raise ValidationError("Image is too large")

    if context.is_demo_user or not backend_available():
        raise ValidationError("Profile pictures are not available in demo mode")

    with LogContext(user_id=context.user_id):
        stored = await profile_picture_storage.upload(context.user_id, data, content_type)
        if not isinstance(stored, Ok):
            return envelope_response(stored)

        url = stored.value["url"]
        linked = await user_service.update_user_record(context.user_id, {"profilePictureUrl": url})
        if not isinstance(linked, Ok):
            return envelope_response(linked)

        session_service.update_current_user(request.session, {"profilePictureUrl": url})
        return {"success": True, "message": MSG_PICTURE_UPLOADED, "url": url}
