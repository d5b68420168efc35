import pytest

from labourconnect.web.pages import PAGES


def test_shell_carries_client_config(demo_mode, client):
    response = client.get("/")

    assert response.status_code == 200
    assert "window.LABOURCONNECT_CONFIG" in response.text
    assert '"pageRenderDelayMs": 50' in response.text
    assert '"notificationTimeoutMs": 5000' in response.text


def test_every_named_page_is_registered():
    assert set(PAGES) == {
        "home",
        "registration",
        "login",
        "find-workers",
        "worker-dashboard",
        "professional-dashboard",
        "profile",
        "map-view",
        "payment",
    }


@pytest.mark.parametrize("name", sorted(PAGES))
def test_every_page_renders_signed_out(demo_mode, client, name):
    response = client.get(f"/pages/{name}")

    assert response.status_code == 200
    data = response.json()
    assert data["html"]
    assert "Login" in data["nav"]


def test_unknown_page_renders_home(demo_mode, client):
    data = client.get("/pages/does-not-exist").json()

    assert data["page"] == "home"
    assert 'id="totalWorkersCount"' in data["html"]


def test_professional_dashboard_guard(demo_mode, client):
    assert client.get("/pages/professional-dashboard").json()["page"] == "home"

    client.post("/api/v1/auth/demo-login/customer")
    assert client.get("/pages/professional-dashboard").json()["page"] == "home"

    client.post("/api/v1/auth/demo-login/professional")
    assert client.get("/pages/professional-dashboard").json()["page"] == "professional-dashboard"


def test_navigation_after_logout_is_unauthenticated(demo_mode, client):
    client.post("/api/v1/auth/demo-login/worker")
    signed_in = client.get("/pages/home").json()["nav"]
    assert "Hi, Rajesh" in signed_in
    assert 'data-page="worker-dashboard"' in signed_in

    client.post("/api/v1/auth/logout")
    nav = client.get("/pages/home").json()["nav"]
    assert "Logout" not in nav
    assert 'data-page="login"' in nav


def test_find_workers_applies_query_filters(demo_mode, client):
    html = client.get("/pages/find-workers", params={"profession": "plumber"}).json()["html"]

    assert "Suresh Patel" in html
    assert "Rajesh Kumar" not in html
    assert "1 worker found" in html


def test_find_workers_ignores_invalid_filters(demo_mode, client):
    html = client.get("/pages/find-workers", params={"minRate": "lots"}).json()["html"]

    assert "3 workers found" in html


def test_payment_page_lists_credit_packs(demo_mode, client):
    html = client.get("/pages/payment").json()["html"]

    for price in ("₹100", "₹250", "₹500"):
        assert price in html


def test_professional_dashboard_lists_own_workers(db, client, registration_payload):
    client.post("/api/v1/users", json=registration_payload(
        fullName="Sharma Constructions", mobile="9000000001", userType="professional", profession="mason", area="Noida",
    ))
    client.post("/api/v1/workers", json={"fullName": "Ravi Kumar", "mobile": "9876543201", "profession": "mason"})

    data = client.get("/pages/professional-dashboard").json()

    assert data["page"] == "professional-dashboard"
    assert "Ravi Kumar" in data["html"]
    assert "1/10" in data["html"]


def test_home_uses_live_stats(db, client, registration_payload):
    client.post("/api/v1/users", json=registration_payload())

    html = client.get("/pages/home").json()["html"]

    assert '<strong id="totalWorkersCount">1</strong>' in html


def test_worker_card_shows_three_skills_and_hides_zero_rating(db, client, registration_payload):
    client.post("/api/v1/users", json=registration_payload(
        fullName="Sharma Constructions", mobile="9000000001", userType="professional", profession="mason", area="Noida",
    ))
    client.post("/api/v1/workers", json={
        "fullName": "Ravi Kumar",
        "mobile": "9876543201",
        "profession": "mason",
        "skills": "Plastering, Tiling, Brickwork, Waterproofing",
    })

    html = client.get("/pages/find-workers", params={"area": "Noida"}).json()["html"]

    assert "Brickwork" in html
    assert "Waterproofing" not in html
    assert "+more" in html
    assert "⭐" not in html


def test_demo_worker_card_rating_has_one_decimal(demo_mode, client):
    html = client.get("/pages/find-workers", params={"profession": "mason"}).json()["html"]

    assert "⭐ 4.7" in html


def test_signed_in_navigation_links_by_role(demo_mode, client):
    assert 'data-page="map-view"' not in client.get("/pages/home").json()["nav"]

    client.post("/api/v1/auth/demo-login/worker")
    worker_nav = client.get("/pages/home").json()["nav"]
    assert 'data-page="map-view"' in worker_nav
    assert 'data-page="payment"' not in worker_nav

    client.post("/api/v1/auth/demo-login/professional")
    professional_nav = client.get("/pages/home").json()["nav"]
    assert 'data-page="map-view"' in professional_nav
    assert 'data-page="payment"' in professional_nav
