"""
labourconnect/services/session_service.py

Purpose: Session management

- Current user held in the signed session cookie ("currentUser")
- Pending OTP verification per client
- Identity sync after a successful code check
- Demo-mode users kept in the session
"""

from dataclasses import dataclass
from typing import Any, Dict, List, MutableMapping, Optional

from labourconnect.core.config import settings
from labourconnect.core.exceptions import DuplicateRegistrationError
from labourconnect.core.logging import get_logger
from labourconnect.core.result import Ok, Result
from labourconnect.schemas.user import Identity, RegistrationRequest
from labourconnect.services.user_service import build_user_document, find_user_by_mobile, user_defaults
from labourconnect.services.verification_service import PendingVerification
from utils.constants import DEMO_ACCOUNTS, MSG_ALREADY_REGISTERED
from utils.time_utils import epoch_millis
from utils.validation_utils import strip_country_code

logger = get_logger(__name__)

CURRENT_USER_KEY = "currentUser"
PENDING_KEY = "pendingVerification"
DEMO_USERS_KEY = "demo_users"

# The whole session must fit in one cookie (4 KB)
DEMO_USERS_KEPT = 3


@dataclass
class SessionContext:
    """
    Who is signed in for this client. Absent user means signed out.
    """
    user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id") if self.user else None

    @property
    def user_type(self) -> Optional[str]:
        return self.user.get("userType") if self.user else None

    @property
    def is_professional(self) -> bool:
        return self.user_type == "professional"

    @property
    def first_name(self) -> str:
        if not self.user:
            return ""
        full_name = (self.user.get("fullName") or "").strip()
        return full_name.split()[0] if full_name else "User"

    @property
    def is_demo_user(self) -> bool:
        user_id = self.user_id or ""
        return user_id.startswith(("demo_", "user_"))


def load_session(session: MutableMapping[str, Any]) -> SessionContext:
    """
    Rehydrates the session context. A malformed stored user is discarded.
    """
    user = session.get(CURRENT_USER_KEY)
    if user is None:
        return SessionContext()

    if not isinstance(user, dict) or not user.get("id"):
        logger.warning("Discarding malformed session user")
        session.pop(CURRENT_USER_KEY, None)
        return SessionContext()

    return SessionContext(user=user)


def login(session: MutableMapping[str, Any], user: Dict[str, Any]) -> SessionContext:
    """Replaces the current user in one step."""
    session[CURRENT_USER_KEY] = dict(user)
    logger.info("Session started", extra={"user_id": user.get("id")})
    return SessionContext(user=session[CURRENT_USER_KEY])


def update_current_user(session: MutableMapping[str, Any], changes: Dict[str, Any]) -> SessionContext:
    context = load_session(session)
    if not context.is_authenticated:
        return context
    return login(session, {**context.user, **changes})


def logout(session: MutableMapping[str, Any]) -> SessionContext:
    """
    Clears the signed-in user and any pending verification. Demo users
    registered in this session are kept.
    """
    user = session.pop(CURRENT_USER_KEY, None)
    session.pop(PENDING_KEY, None)
    if user:
        logger.info("Session ended", extra={"user_id": user.get("id")})
    return SessionContext()


def store_pending_verification(session: MutableMapping[str, Any], pending: PendingVerification):
    session[PENDING_KEY] = pending.to_dict()


def get_pending_verification(session: MutableMapping[str, Any]) -> Optional[PendingVerification]:
    return PendingVerification.from_dict(session.get(PENDING_KEY))


def clear_pending_verification(session: MutableMapping[str, Any]):
    session.pop(PENDING_KEY, None)


async def sync_identity(session: MutableMapping[str, Any], identity: Identity) -> Result:
    """
    Hydrates the session from the user record matching a verified phone.

    Returns:
        Ok(SessionContext) when a user exists, otherwise the NotFound or
        Failure of the lookup (the session is left unchanged)
    """
    mobile = strip_country_code(identity.phone_number, settings.COUNTRY_CODE)
    result = await find_user_by_mobile(mobile)

    if isinstance(result, Ok):
        return Ok(login(session, result.value))

    logger.info(f"No session for verified phone: {result.message}", extra={"mobile": mobile})
    return result


# ============================================================
# DEMO MODE
# ============================================================

def get_demo_users(session: MutableMapping[str, Any]) -> List[Dict[str, Any]]:
    return list(session.get(DEMO_USERS_KEY) or [])


def find_demo_user(session: MutableMapping[str, Any], mobile: str) -> Optional[Dict[str, Any]]:
    for user in get_demo_users(session):
        if user.get("mobile") == mobile:
            return user
    return None


def register_demo_user(session: MutableMapping[str, Any], request: RegistrationRequest) -> Dict[str, Any]:
    """
    Registers a user in the session only. Blank fields are dropped and
    only the last DEMO_USERS_KEPT registrations are kept.

    Raises:
        DuplicateRegistrationError: The mobile is already registered in this session
    """
    if find_demo_user(session, request.mobile):
        raise DuplicateRegistrationError(MSG_ALREADY_REGISTERED)

    document = {**build_user_document(request), **user_defaults(), "id": f"user_{epoch_millis()}"}
    user = {key: value for key, value in document.items() if value not in (None, "")}
    session[DEMO_USERS_KEY] = (get_demo_users(session) + [user])[-DEMO_USERS_KEPT:]
    logger.info("Demo user registered", extra={"user_id": user["id"]})
    return user


def demo_login(session: MutableMapping[str, Any], user_type: str) -> Optional[SessionContext]:
    """
    Signs in as the canned demo account for a role. None for unknown roles.
    """
    account = DEMO_ACCOUNTS.get(user_type)
    if account is None:
        return None
    return login(session, account)
