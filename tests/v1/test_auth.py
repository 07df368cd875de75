# mypy: ignore-errors
# tests/v1/test_auth.py
"""Tests for bearer token verification."""

from datetime import timedelta

from fastapi import status

from knit_server.db.time import utcnow


def _headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_missing_token(client) -> None:
    response = client.get("/api/v1/profiles/me")
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_malformed_token(client) -> None:
    response = client.get("/api/v1/profiles/me", headers=_headers("not-a-jwt"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_expired_token(client, test_user, token_factory) -> None:
    token = token_factory(test_user.id, exp=utcnow() - timedelta(minutes=1))
    response = client.get("/api/v1/profiles/me", headers=_headers(token))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_wrong_audience(client, test_user, token_factory) -> None:
    token = token_factory(test_user.id, aud="someone-else")
    response = client.get("/api/v1/profiles/me", headers=_headers(token))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_wrong_secret(client, test_user, test_settings, token_factory) -> None:
    settings = test_settings.model_copy(update={"auth_jwt_secret": "other-secret"})
    token = token_factory(test_user.id, settings=settings)
    response = client.get("/api/v1/profiles/me", headers=_headers(token))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_unknown_subject(client, token_factory) -> None:
    response = client.get("/api/v1/profiles/me", headers=_headers(token_factory("nobody")))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "User not found"


def test_optional_auth_rejects_bad_token(client, community) -> None:
    """Public pages still reject a token that is present but invalid."""
    response = client.get(f"/api/v1/communities/{community.id}", headers=_headers("garbage"))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
