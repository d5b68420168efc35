from fastapi.testclient import TestClient
from labourconnect.main import app

client = TestClient(app)


def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert "message" in data
    assert data["code"] == "HTTP_ERROR"


def test_validation_error_structure():
    # Registration without a valid mobile fails body validation
    response = client.post("/api/v1/users", json={"fullName": "Asha", "mobile": "12345", "userType": "customer"})
    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "VALIDATION_ERROR"
    assert data["message"] == "Please enter a valid 10-digit Indian mobile number"
    assert len(data["details"]) > 0


def test_custom_exception():
    from labourconnect.core.exceptions import ResourceNotFoundError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Item not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["message"] == "Item not found"


def test_authentication_required():
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    data = response.json()
    assert data["code"] == "AUTHENTICATION_REQUIRED"
    assert data["message"] == "Please login first"


def test_unhandled_exception_uses_envelope():
    @app.get("/test-unhandled-error")
    def trigger_unhandled_error():
        raise RuntimeError("boom")

    no_raise = TestClient(app, raise_server_exceptions=False)
    response = no_raise.get("/test-unhandled-error")
    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "INTERNAL_ERROR"


def test_backend_failures_map_to_bad_gateway():
    from labourconnect.api.deps import result_status
    from labourconnect.core.result import Failure

    assert result_status(Failure(message="Twilio said no", code="TWILIO_ERROR")) == 502
    assert result_status(Failure(message="down", code="DATABASE_ERROR")) == 502
    assert result_status(Failure(message="busy", code="ALREADY_EXISTS")) == 409
