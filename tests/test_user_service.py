import pytest

from labourconnect.core.exceptions import DuplicateRegistrationError
from labourconnect.core.result import Failure, NotFound, Ok
from labourconnect.schemas.user import RegistrationRequest
from labourconnect.services import user_service, worker_service


def worker_request(**overrides):
    data = {
        "fullName": "Ramesh Yadav",
        "mobile": "9876543210",
        "userType": "worker",
        "profession": "electrician",
        "address": "12, MG Road",
        "area": "Andheri East",
    }
    data.update(overrides)
    return RegistrationRequest(**data)


async def test_create_user_record_sets_defaults(db):
    result = await user_service.create_user_record({"fullName": "Asha", "mobile": "9123456780", "userType": "customer"})

    assert isinstance(result, Ok)
    stored = await db.users.find_one({"mobile": "9123456780"})
    assert stored["isActive"] is True
    assert stored["isVerified"] is False
    assert stored["rating"] == 0
    assert stored["jobsCompleted"] == 0
    assert stored["createdAt"] == stored["updatedAt"]
    assert result.value["userId"] == str(stored["_id"])
    assert result.value["user"]["id"] == result.value["userId"]


async def test_register_worker_fills_blank_fields(db):
    result = await user_service.register_user(worker_request(dailyRate="", experience=""))

    assert isinstance(result, Ok)
    user = result.value["user"]
    assert user["dailyRate"] == 800
    assert user["experience"] == ""
    assert user["age"] == 0
    assert user["skills"] == ""
    assert user["profileViews"] == 0
    assert user["fatherName"] == ""


async def test_register_customer_has_no_trade_fields(db):
    request = RegistrationRequest(fullName="Asha", mobile="9123456780", userType="customer")
    result = await user_service.register_user(request)

    assert isinstance(result, Ok)
    assert "profession" not in result.value["user"]
    assert "dailyRate" not in result.value["user"]


async def test_register_professional_starts_with_zero_workers(db):
    result = await user_service.register_user(worker_request(userType="professional", mobile="9000000001"))
    assert result.value["user"]["workersCount"] == 0


async def test_duplicate_mobile_is_rejected(db):
    await user_service.register_user(worker_request())

    with pytest.raises(DuplicateRegistrationError):
        await user_service.register_user(worker_request(fullName="Someone Else"))

    assert await db.users.count_documents({"mobile": "9876543210"}) == 1


async def test_registration_updates_aggregates(db):
    await user_service.register_user(worker_request())
    await user_service.register_user(worker_request(mobile="9876543211", area="andheri  east"))

    area = await db.areas.find_one({"_id": "andheri-east"})
    profession = await db.professions.find_one({"_id": "electrician"})
    assert area["workerCount"] == 2
    assert profession["workerCount"] == 2
    assert profession["name"] == "Electrician"


async def test_find_user_by_mobile(db):
    await user_service.register_user(worker_request())

    found = await user_service.find_user_by_mobile("9876543210")
    missing = await user_service.find_user_by_mobile("9000000000")

    assert isinstance(found, Ok)
    assert found.value["fullName"] == "Ramesh Yadav"
    assert isinstance(missing, NotFound)


async def test_update_user_record_is_partial(db):
    created = await user_service.register_user(worker_request())
    user_id = created.value["userId"]

    result = await user_service.update_user_record(user_id, {"skills": "Wiring"})
    assert isinstance(result, Ok)

    fetched = await user_service.get_user(user_id)
    assert fetched.value["skills"] == "Wiring"
    assert fetched.value["profession"] == "electrician"


async def test_update_unknown_user_is_not_found(db):
    assert isinstance(await user_service.update_user_record("0" * 24, {"skills": "x"}), NotFound)
    assert isinstance(await user_service.update_user_record("not-an-id", {"skills": "x"}), NotFound)


async def test_backend_errors_become_failures(monkeypatch, db):
    def broken():
        raise RuntimeError("connection reset")

    monkeypatch.setattr(user_service, "get_users_collection", broken)

    result = await user_service.find_user_by_mobile("9876543210")
    assert isinstance(result, Failure)
    assert result.message == "connection reset"


async def test_registered_electrician_is_a_user_not_a_directory_worker(db):
    await user_service.register_user(worker_request(area="Mumbai"))

    found = await user_service.find_user_by_mobile("9876543210")
    assert found.value["isActive"] is True
    assert found.value["isVerified"] is False
    assert found.value["rating"] == 0
    assert found.value["profession"] == "electrician"

    listed = await worker_service.list_workers({"area": "Mumbai", "profession": "electrician"})
    assert isinstance(listed, Ok)
    assert listed.value == {"workers": [], "count": 0}


async def test_deactivated_user_does_not_block_the_mobile(db):
    await db.users.insert_one({"fullName": "Old Account", "mobile": "9876543210", "isActive": False})

    assert isinstance(await user_service.find_user_by_mobile("9876543210"), NotFound)

    result = await user_service.register_user(worker_request())
    assert isinstance(result, Ok)
    assert result.value["user"]["fullName"] == "Ramesh Yadav"
