"""Portal token middleware: service keys, token sources, redirects."""

import pytest
from fastapi.testclient import TestClient

from apogee.core.config import settings
from apogee.core.constants import ServiceName
from apogee.core.security import create_access_token
from apogee.main import create_app

SIGN_IN = f"{settings.PORTAL_URL}/auth/signin"


def token_for(*roles: str, minutes: int | None = None) -> str:
    return create_access_token({"userId": 7, "email": "agent@example.com", "roles": list(roles)}, minutes)


@pytest.fixture
def client() -> TestClient:
    app = create_app(ServiceName.QUOTING)
    return TestClient(app, follow_redirects=False)


def test_health_is_public(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "quoting", "env": settings.APP_ENV}


def test_missing_token_redirects_to_sign_in(client):
    response = client.get("/api/v1/templates")
    assert response.status_code == 307
    assert response.headers["location"] == SIGN_IN


def test_invalid_token_redirects_and_clears_cookie(client):
    response = client.get("/api/v1/templates", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 307
    assert response.headers["location"] == SIGN_IN
    assert f'{settings.SERVICE_TOKEN_COOKIE}=""' in response.headers["set-cookie"]


def test_expired_token_is_rejected(client):
    response = client.get(
        "/api/v1/templates",
        headers={"Authorization": f"Bearer {token_for('Quoting', minutes=-5)}"},
    )
    assert response.headers["location"] == SIGN_IN


def test_wrong_role_redirects_to_unauthorized(client):
    response = client.get(
        "/api/v1/templates",
        headers={"Authorization": f"Bearer {token_for('BenefitDesigner')}"},
    )
    assert response.status_code == 307
    assert response.headers["location"] == "/unauthorized"


def test_unauthorized_page_answers_403(client):
    assert client.get("/unauthorized").status_code == 403


def test_query_token_is_exchanged_for_cookie(client):
    token = token_for("Admin")
    response = client.get(f"/api/v1/quotes?status=Archived&token={token}")

    assert response.status_code == 307
    assert response.headers["location"].endswith("/api/v1/quotes?status=Archived")
    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"{settings.SERVICE_TOKEN_COOKIE}={token}")
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()


def test_wrong_service_key_falls_back_to_token_check(client):
    response = client.get("/api/v1/templates", headers={"X-Service-Key": "guess"})
    assert response.headers["location"] == SIGN_IN


def test_role_allow_lists_differ_per_service():
    app = create_app(ServiceName.CUSTOMER)
    client = TestClient(app, follow_redirects=False)
    response = client.get(
        "/api/v1/quotes",
        headers={"Authorization": f"Bearer {token_for('Quoting')}"},
    )
    assert response.headers["location"] == "/unauthorized"
