import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from labourconnect.core.config import settings
from labourconnect.db import mongo


@pytest.fixture
def db(monkeypatch):
    """In-memory Mongo database wired in place of the real connection."""
    client = AsyncMongoMockClient()
    database = client["labourconnect_test"]
    monkeypatch.setattr(mongo, "_client", client)
    monkeypatch.setattr(mongo, "_database", database)
    monkeypatch.setattr(settings, "DEMO_MODE", False)
    return database


@pytest.fixture
def demo_mode(monkeypatch):
    monkeypatch.setattr(mongo, "_client", None)
    monkeypatch.setattr(mongo, "_database", None)
    monkeypatch.setattr(settings, "DEMO_MODE", True)


@pytest.fixture
def client():
    # No context manager: the lifespan (real Mongo connection) is not run
    from labourconnect.main import app
    return TestClient(app)


@pytest.fixture
def registration_payload():
    """Factory for a valid worker registration body."""
    def build(**overrides):
        payload = {
            "fullName": "Ramesh Yadav",
            "mobile": "9876543210",
            "userType": "worker",
            "profession": "electrician",
            "experience": "5-10",
            "dailyRate": "",
            "address": "12, MG Road",
            "area": "Andheri East",
            "pincode": "400069",
        }
        payload.update(overrides)
        return payload
    return build
