import pytest

from labourconnect.core.exceptions import DuplicateRegistrationError
from labourconnect.core.result import NotFound, Ok
from labourconnect.schemas.user import Identity, RegistrationRequest
from labourconnect.services import session_service, user_service
from labourconnect.services.verification_service import PendingVerification


def customer(mobile="9123456780"):
    return RegistrationRequest(fullName="Asha Rao", mobile=mobile, userType="customer")


def test_empty_session_is_signed_out():
    context = session_service.load_session({})

    assert not context.is_authenticated
    assert context.user_id is None
    assert context.first_name == ""


def test_malformed_session_user_is_discarded():
    session = {"currentUser": "not-a-record"}

    context = session_service.load_session(session)

    assert not context.is_authenticated
    assert "currentUser" not in session


def test_first_name_fallback():
    assert session_service.SessionContext(user={"id": "1", "fullName": "  "}).first_name == "User"
    assert session_service.SessionContext(user={"id": "1", "fullName": "Asha Rao"}).first_name == "Asha"


def test_logout_clears_user_and_pending_code_but_keeps_demo_users():
    session = {}
    session_service.register_demo_user(session, customer())
    session_service.login(session, {"id": "user_1", "fullName": "Asha"})
    session_service.store_pending_verification(session, PendingVerification(phone_number="+919123456780"))

    session_service.logout(session)

    assert session_service.load_session(session).user is None
    assert session_service.get_pending_verification(session) is None
    assert len(session_service.get_demo_users(session)) == 1


def test_demo_registration_rejects_duplicate_mobile():
    session = {}
    user = session_service.register_demo_user(session, customer())

    assert user["id"].startswith("user_")
    assert user["isActive"] is True
    with pytest.raises(DuplicateRegistrationError):
        session_service.register_demo_user(session, customer())


def test_update_current_user_merges_changes():
    session = {}
    session_service.login(session, {"id": "1", "fullName": "Asha", "area": "Delhi"})

    context = session_service.update_current_user(session, {"area": "Noida"})

    assert context.user == {"id": "1", "fullName": "Asha", "area": "Noida"}


def test_demo_login_unknown_role():
    assert session_service.demo_login({}, "admin") is None


async def test_sync_identity_hydrates_registered_user(db):
    await user_service.register_user(customer())
    session = {}

    result = await session_service.sync_identity(session, Identity(uid="x", phoneNumber="+919123456780"))

    assert isinstance(result, Ok)
    assert result.value.user["fullName"] == "Asha Rao"
    assert session["currentUser"]["mobile"] == "9123456780"


async def test_sync_identity_leaves_session_alone_for_unknown_phone(db):
    session = {}

    result = await session_service.sync_identity(session, Identity(uid="x", phoneNumber="+919000000000"))

    assert isinstance(result, NotFound)
    assert session == {}


def test_demo_users_keep_only_recent_registrations_without_blank_fields():
    session = {}
    for i in range(5):
        session_service.register_demo_user(session, customer(mobile=f"912345678{i}"))

    users = session_service.get_demo_users(session)

    assert [u["mobile"] for u in users] == ["9123456782", "9123456783", "9123456784"]
    assert all(value not in (None, "") for u in users for value in u.values())
