"""
labourconnect/services/verification_service.py

Purpose: Phone OTP verification

- Human verification challenge (reCAPTCHA) before any code is sent
- Sends and checks codes through the Twilio Verify API
- Demo mode accepts a fixed code without any network call
- The pending verification is returned to the caller, which keeps it in
  the client's session
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import httpx

from labourconnect.core.config import settings
from labourconnect.core.logging import get_logger
from labourconnect.core.result import Failure, Ok, Result
from labourconnect.schemas.user import Identity
from labourconnect.services.gateway import gateway_call
from utils.constants import MSG_CAPTCHA_FAILED, MSG_INVALID_MOBILE, MSG_INVALID_OTP, MSG_NO_PENDING_OTP
from utils.time_utils import utc_now_iso
from utils.validation_utils import format_phone_number, validate_indian_mobile, validate_otp_format

logger = get_logger(__name__)


@dataclass
class PendingVerification:
    """
    A code has been sent to phone_number and not yet confirmed.
    """
    phone_number: str
    sid: Optional[str] = None
    demo: bool = False
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["PendingVerification"]:
        if not data or not data.get("phone_number"):
            return None
        return cls(
            phone_number=data["phone_number"],
            sid=data.get("sid"),
            demo=bool(data.get("demo")),
            created_at=data.get("created_at", ""),
        )


class VerificationService:
    """Service for phone verification via Twilio Verify"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # Custom transport lets tests answer requests without the network
        self.transport = transport

    @property
    def base_url(self) -> str:
        return f"{settings.TWILIO_VERIFY_BASE_URL}/Services/{settings.TWILIO_VERIFY_SERVICE_SID}"

    def is_configured(self) -> bool:
        """Check if Twilio Verify is properly configured"""
        return settings.twilio_configured

    def _client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self.transport,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            **kwargs
        )

    async def verify_challenge(self, token: Optional[str], remote_ip: Optional[str] = None) -> bool:
        """
        Checks a reCAPTCHA token. Always passes when no secret is configured.
        """
        if not settings.RECAPTCHA_SECRET_KEY:
            return True
        if not token:
            return False

        data = {"secret": settings.RECAPTCHA_SECRET_KEY, "response": token}
        if remote_ip:
            data["remoteip"] = remote_ip

        async with self._client() as client:
            response = await client.post(settings.RECAPTCHA_VERIFY_URL, data=data)

        if response.status_code != 200:
            logger.error(f"reCAPTCHA verify error: {response.status_code}")
            return False

        result = response.json()
        if not result.get("success"):
            logger.warning(f"reCAPTCHA rejected: {result.get('error-codes')}")
            return False
        return True

    @gateway_call("sending OTP")
    async def send_verification_code(
        self,
        mobile: str,
        captcha_token: Optional[str] = None,
        remote_ip: Optional[str] = None
    ) -> Result:
        """
        Sends a one-time code to an Indian mobile number.

        Args:
            mobile: 10-digit mobile number (no country code)
            captcha_token: reCAPTCHA token from the login page
            remote_ip: Client IP forwarded to reCAPTCHA

        Returns:
            Ok(PendingVerification) or Failure
        """
        if not validate_indian_mobile(mobile):
            return Failure(message=MSG_INVALID_MOBILE, code="INVALID_MOBILE")

        phone_number = format_phone_number(mobile, settings.COUNTRY_CODE)

        if not self.is_configured():
            if settings.DEMO_MODE:
                logger.info("Demo OTP issued", extra={"mobile": mobile})
                return Ok(PendingVerification(phone_number=phone_number, demo=True, created_at=utc_now_iso()))
            return Failure(message="Phone verification is not configured", code="NOT_CONFIGURED")

        if not await self.verify_challenge(captcha_token, remote_ip):
            return Failure(message=MSG_CAPTCHA_FAILED, code="CAPTCHA_FAILED")

        logger.info(f"📤 Sending OTP to {phone_number}")

        async with self._client(auth=(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)) as client:
            response = await client.post(
                f"{self.base_url}/Verifications",
                data={"To": phone_number, "Channel": "sms"}
            )

        if response.status_code not in (200, 201):
            logger.error(f"❌ Twilio Verify error: {response.status_code} - {response.text}")
            return Failure(
                message=f"Twilio Verify error: {response.status_code}",
                code=_twilio_error_code(response)
            )

        body = response.json()
        logger.info(f"✅ OTP sent: SID={body.get('sid')}")
        return Ok(PendingVerification(phone_number=phone_number, sid=body.get("sid"), created_at=utc_now_iso()))

    @gateway_call("verifying OTP")
    async def verify_code(self, pending: Optional[PendingVerification], code: str) -> Result:
        """
        Confirms a code against the pending verification.

        Returns:
            Ok(Identity) or Failure (NO_PENDING_REQUEST, INVALID_CODE, EXPIRED, ...)
        """
        if pending is None:
            return Failure(message=MSG_NO_PENDING_OTP, code="NO_PENDING_REQUEST")

        code = (code or "").strip()
        if not validate_otp_format(code):
            return Failure(message=MSG_INVALID_OTP, code="INVALID_CODE")

        if pending.demo:
            if code != settings.DEMO_OTP_CODE:
                return Failure(message=MSG_INVALID_OTP, code="INVALID_CODE")
            return Ok(Identity(uid=pending.phone_number, phone_number=pending.phone_number))

        async with self._client(auth=(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)) as client:
            response = await client.post(
                f"{self.base_url}/VerificationCheck",
                data={"To": pending.phone_number, "Code": code}
            )

        if response.status_code == 404:
            # Twilio drops verifications once approved, expired or out of attempts
            return Failure(message="OTP expired. Please send a new one.", code="EXPIRED")

        if response.status_code != 200:
            logger.error(f"❌ Twilio Verify check error: {response.status_code} - {response.text}")
            return Failure(
                message=f"Twilio Verify error: {response.status_code}",
                code=_twilio_error_code(response)
            )

        body = response.json()
        if body.get("status") != "approved":
            return Failure(message=MSG_INVALID_OTP, code="INVALID_CODE")

        logger.info(f"✅ OTP approved for {pending.phone_number}")
        return Ok(Identity(uid=pending.phone_number, phone_number=pending.phone_number))

    async def sign_out(self) -> Result:
        """
        Nothing is held server-side by Twilio Verify; the session layer
        drops the identity.
        """
        return Ok(None)


def _twilio_error_code(response: httpx.Response) -> str:
    try:
        code = response.json().get("code")
    except ValueError:
        code = None
    return str(code) if code else "TWILIO_ERROR"


# Singleton instance
verification_service = VerificationService()
