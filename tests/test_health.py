from app.platform.config import Settings


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200

    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "API is healthy"
    assert "timestamp" in payload


def test_root_info(client):
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()
    assert payload["app_name"] == "Dvand Waitlist API"
    assert payload["version"] == "1.0.0"
    assert payload["docs_url"] == "/docs"


def test_cors_allows_any_origin_outside_production(client):
    response = client.get("/health", headers={"Origin": "https://elsewhere.example"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_allowed_origins_follow_production_mode():
    assert Settings(PRODUCTION_MODE=False).get_allowed_origins() == ["*"]
    assert Settings(PRODUCTION_MODE=True).get_allowed_origins() == ["https://dvand.in"]
    assert Settings(PRODUCTION_MODE=True, ALLOWED_ORIGIN="https://waitlist.dvand.in").get_allowed_origins() == [
        "https://waitlist.dvand.in"
    ]


def test_full_signup_through_app(client, storage):
    response = client.post("/waitlist", json={"email": "new@user.com", "userAgent": "Mozilla/5.0"})

    assert response.status_code == 201
    assert response.json()["data"] == {"email": "new@user.com", "signupNumber": 1}
    assert storage.scan_column("Email") == ["Email", "new@user.com"]
