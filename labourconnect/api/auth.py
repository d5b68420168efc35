"""
labourconnect/api/auth.py

Purpose: Phone OTP login and session endpoints

- POST /auth/send-otp      human challenge + send code
- POST /auth/verify-otp    check code, sign in the matching user
- POST /auth/logout
- GET  /auth/me
- POST /auth/demo-login/{user_type}  (demo mode only)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from labourconnect.api.deps import envelope_response, get_session_context, require_user
from labourconnect.core.config import settings
from labourconnect.core.exceptions import ResourceNotFoundError, ValidationError
from labourconnect.core.logging import LogContext, get_logger
from labourconnect.core.result import Failure, NotFound, Ok
from labourconnect.schemas.user import CamelModel
from labourconnect.services import session_service
from labourconnect.services.gateway import backend_available
from labourconnect.services.session_service import SessionContext
from labourconnect.services.verification_service import verification_service
from utils.constants import (
    HOME_PAGE_BY_USER_TYPE,
    MSG_DEMO_LOGIN,
    MSG_INVALID_MOBILE,
    MSG_LOGGED_OUT,
    MSG_NO_PENDING_OTP,
    MSG_OTP_SENT,
    MSG_OTP_SENT_DEMO,
    MSG_USER_NOT_FOUND,
    MSG_WELCOME_BACK,
)
from utils.validation_utils import format_phone_number, validate_indian_mobile

logger = get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


class SendOtpRequest(CamelModel):
    mobile: str
    captcha_token: Optional[str] = None


class VerifyOtpRequest(CamelModel):
    mobile: str
    otp: str


def _clean_mobile(mobile: str) -> str:
    mobile = (mobile or "").strip()
    if not validate_indian_mobile(mobile):
        raise ValidationError(MSG_INVALID_MOBILE)
    return mobile


def _signed_in(context: SessionContext) -> dict:
    return {
        "success": True,
        "user": context.user,
        "message": MSG_WELCOME_BACK.format(name=context.first_name),
        "redirect": HOME_PAGE_BY_USER_TYPE.get(context.user_type, "home"),
    }


@router.post("/send-otp")
async def send_otp(payload: SendOtpRequest, request: Request):
    """
    Sends a one-time code; the pending verification is kept in the session.
    """
    mobile = _clean_mobile(payload.mobile)

    with LogContext(mobile=mobile):
        result = await verification_service.send_verification_code(
            mobile,
            captcha_token=payload.captcha_token,
            remote_ip=request.client.host if request.client else None
        )

        if not isinstance(result, Ok):
            return envelope_response(result)

        pending = result.value
        session_service.store_pending_verification(request.session, pending)

        message = MSG_OTP_SENT_DEMO if pending.demo else MSG_OTP_SENT
        return {
            "success": True,
            "message": message.format(mobile=mobile),
            "demo": pending.demo,
            "otpValiditySeconds": settings.OTP_VALIDITY_SECONDS,
        }


@router.post("/verify-otp")
async def verify_otp(payload: VerifyOtpRequest, request: Request):
    """
    Confirms the code and signs in the user registered with this mobile.
    Unknown numbers are sent to registration.
    """
    mobile = _clean_mobile(payload.mobile)

    with LogContext(mobile=mobile):
        pending = session_service.get_pending_verification(request.session)
        if pending and pending.phone_number != format_phone_number(mobile, settings.COUNTRY_CODE):
            # Code was requested for another number
            pending = None
        if pending is None:
            return envelope_response(Failure(message=MSG_NO_PENDING_OTP, code="NO_PENDING_REQUEST"))

        verified = await verification_service.verify_code(pending, payload.otp)
        if not isinstance(verified, Ok):
            return envelope_response(verified)

        session_service.clear_pending_verification(request.session)

        if pending.demo or not backend_available():
            user = session_service.find_demo_user(request.session, mobile)
            if user is None:
                return envelope_response(NotFound(MSG_USER_NOT_FOUND), redirect="registration")
            return _signed_in(session_service.login(request.session, user))

        synced = await session_service.sync_identity(request.session, verified.value)
        if isinstance(synced, NotFound):
            return envelope_response(NotFound(MSG_USER_NOT_FOUND), redirect="registration")
        if not isinstance(synced, Ok):
            return envelope_response(synced)

        return _signed_in(synced.value)


@router.post("/logout")
async def logout(request: Request):
    await verification_service.sign_out()
    session_service.logout(request.session)
    return {"success": True, "message": MSG_LOGGED_OUT, "redirect": "home"}


@router.get("/me")
async def me(context: SessionContext = Depends(require_user)):
    return {"success": True, "user": context.user}


@router.get("/session")
async def session_state(context: SessionContext = Depends(get_session_context)):
    """Signed-in state for the shell; never fails when signed out."""
    return {
        "success": True,
        "authenticated": context.is_authenticated,
        "user": context.user,
    }


@router.post("/demo-login/{user_type}")
async def demo_login(user_type: str, request: Request):
    if not settings.DEMO_MODE:
        raise ResourceNotFoundError("Demo login is only available in demo mode")

    context = session_service.demo_login(request.session, user_type)
    if context is None:
        return envelope_response(NotFound(f"Unknown demo account: {user_type}"))

    return {
        "success": True,
        "user": context.user,
        "message": MSG_DEMO_LOGIN.format(user_type=user_type),
        "redirect": HOME_PAGE_BY_USER_TYPE.get(user_type, "home"),
    }
