"""
Tests for the JWT token endpoints the frontend logs in with.
"""
import pytest


@pytest.mark.django_db
def test_obtain_and_refresh_token(client, user):
    """A user can obtain a token pair and refresh the access token."""
    resp = client.post(
        "/api/auth/token/", {"username": "u1", "password": "pass12345"}, content_type="application/json"
    )
    assert resp.status_code == 200
    tokens = resp.json()
    assert {"access", "refresh"} <= set(tokens)

    refreshed = client.post(
        "/api/auth/token/refresh/", {"refresh": tokens["refresh"]}, content_type="application/json"
    )
    assert refreshed.status_code == 200
    assert "access" in refreshed.json()


@pytest.mark.django_db
def test_wrong_password_rejected(client, user):
    resp = client.post(
        "/api/auth/token/", {"username": "u1", "password": "nope"}, content_type="application/json"
    )
    assert resp.status_code == 401


@pytest.mark.django_db
def test_bearer_token_grants_api_access(auth_client):
    resp = auth_client.get("/api/messages/unread/")
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "count": 0}
