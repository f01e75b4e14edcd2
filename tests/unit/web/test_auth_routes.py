"""Tests for the auth HTTP endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from starlette.responses import Response

from keeperauth.app import App
from keeperauth.web.server import create_fastapi_app


@pytest.fixture
def app_instance(config):
    return App(config)


@pytest.fixture
def client(app_instance, config):
    return TestClient(create_fastapi_app(app_instance, config))


def sign_in(app_instance: App, user_id: str) -> str:
    return asyncio.run(app_instance.sign_in(user_id, Response()))


def test_health_is_public(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}


class TestSessionStatus:
    def test_without_cookie(self, client):
        r = client.get("/api/v1/auth/session")
        assert r.status_code == 200
        assert r.json() == {"authenticated": False, "userId": None}

    def test_with_valid_cookie(self, client, app_instance):
        client.cookies.set("session", sign_in(app_instance, "user-42"))
        r = client.get("/api/v1/auth/session")
        assert r.status_code == 200
        assert r.json() == {"authenticated": True, "userId": "user-42"}

    def test_with_invalid_cookie(self, client):
        client.cookies.set("session", "not-a-token")
        r = client.get("/api/v1/auth/session")
        assert r.status_code == 200
        assert r.json() == {"authenticated": False, "userId": None}


class TestMe:
    def test_requires_session(self, client):
        r = client.get("/api/v1/auth/me")
        assert r.status_code == 401
        assert r.json() == {"message": "Authentication required", "type": "authentication_error"}

    def test_rejects_forged_cookie(self, client, app_instance):
        token = sign_in(app_instance, "user-42")
        client.cookies.set("session", token[:-4] + "AAAA")
        r = client.get("/api/v1/auth/me")
        assert r.status_code == 401

    def test_returns_user(self, client, app_instance):
        client.cookies.set("session", sign_in(app_instance, "user-42"))
        r = client.get("/api/v1/auth/me")
        assert r.status_code == 200
        assert r.json() == {"userId": "user-42"}

    def test_no_www_authenticate_header(self, client):
        r = client.get("/api/v1/auth/me")
        assert "www-authenticate" not in {k.lower() for k in r.headers.keys()}


class TestSignout:
    def test_clears_cookie(self, client, app_instance):
        client.cookies.set("session", sign_in(app_instance, "user-42"))
        r = client.post("/api/v1/auth/signout")
        assert r.status_code == 204
        cookie = r.headers.get("set-cookie", "").lower()
        assert cookie.startswith("session=")
        assert "max-age=0" in cookie

    def test_without_session(self, client):
        r = client.post("/api/v1/auth/signout")
        assert r.status_code == 204
        assert "max-age=0" in r.headers.get("set-cookie", "").lower()


class TestMissingSecret:
    """The server stays up; only requests that need the key fail."""

    @pytest.fixture
    def client(self, config_without_secret):
        return TestClient(create_fastapi_app(App(config_without_secret), config_without_secret))

    def test_no_cookie_is_unauthenticated(self, client):
        r = client.get("/api/v1/auth/me")
        assert r.status_code == 401

    def test_cookie_needs_key(self, client):
        client.cookies.set("session", "a.b.c")
        r = client.get("/api/v1/auth/me")
        assert r.status_code == 500
        assert r.json() == {"message": "Server configuration error.", "type": "configuration_error"}


def test_openapi_documents_session_cookie(client):
    schema = client.get("/openapi.json").json()
    assert schema["components"]["securitySchemes"]["SessionCookie"]["name"] == "session"
    assert schema["paths"]["/api/v1/auth/session"]["get"]["security"] == []
    assert schema["paths"]["/api/v1/auth/me"]["get"]["security"] == [{"SessionCookie": []}]
