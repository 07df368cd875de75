# mypy: ignore-errors
# tests/v1/test_profiles.py
"""Tests for profile, people directory, search and dashboard endpoints."""

from fastapi import status

from knit_server.models import Profile


def test_get_my_profile(client, test_user, auth_token) -> None:
    response = client.get("/api/v1/profiles/me", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == test_user.id
    assert data["initials"] == "SC"


def test_get_profile_by_id(client, other_user) -> None:
    response = client.get(f"/api/v1/profiles/{other_user.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "James Park"


def test_get_missing_profile(client) -> None:
    response = client.get("/api/v1/profiles/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_nameless_profile_initials(client, db_session) -> None:
    """Profiles without a name fall back to placeholder initials."""
    anonymous = Profile(role="mentee")
    db_session.add(anonymous)
    db_session.flush()

    response = client.get(f"/api/v1/profiles/{anonymous.id}")
    assert response.json()["initials"] == "UN"


def test_update_my_profile(client, auth_token) -> None:
    """Only supplied fields change."""
    response = client.patch(
        "/api/v1/profiles/me",
        json={"bio": "Now teaching Rust", "skills": ["Rust", " ", "Python "]},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["bio"] == "Now teaching Rust"
    assert data["skills"] == ["Rust", "Python"]
    assert data["name"] == "Sarah Chen"


def test_update_rejects_unknown_role(client, auth_token) -> None:
    response = client.patch("/api/v1/profiles/me", json={"role": "guru"}, headers=auth_token)
    assert response.status_code == 422


def test_people_directory(client, test_user, other_user, db_session) -> None:
    """Selecting mentors also lists people who are both."""
    both = Profile(name="Maria Lopez", role="both", skills=["Gardening"])
    db_session.add(both)
    db_session.flush()

    mentors = client.get("/api/v1/people/", params={"role": "mentor"}).json()
    assert {p["name"] for p in mentors} == {"Sarah Chen", "Maria Lopez"}

    gardeners = client.get("/api/v1/people/", params={"skill": "garden"}).json()
    assert [p["name"] for p in gardeners] == ["Maria Lopez"]

    assert len(client.get("/api/v1/people/").json()) == 3


def test_search_with_counts(client, community, test_user, other_user) -> None:
    """Counts describe every tab even when one tab is selected."""
    response = client.get("/api/v1/search/", params={"tab": "mentees"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["communities"] == []
    assert [p["name"] for p in data["people"]] == ["James Park"]
    assert data["counts"] == {"all": 3, "communities": 1, "mentors": 1, "mentees": 1}


def test_search_by_category(client, community, test_user, other_user) -> None:
    response = client.get("/api/v1/search/", params={"categories": ["Technology"]})
    data = response.json()
    assert [c["id"] for c in data["communities"]] == [community.id]
    assert [p["name"] for p in data["people"]] == ["Sarah Chen"]


def test_search_text(client, community, test_user) -> None:
    data = client.get("/api/v1/search/", params={"q": "digital"}).json()
    assert data["query"] == "digital"
    assert [c["id"] for c in data["communities"]] == [community.id]
    assert data["people"] == []


def test_dashboard(client, community, membership, test_event, auth_token, other_user) -> None:
    """The dashboard collects the caller's communities, connections and events."""
    client.post(
        f"/api/v1/events/{test_event.id}/rsvp", json={"status": "attending"}, headers=auth_token
    )
    client.post(
        "/api/v1/connections/", json={"to_user_id": other_user.id}, headers=auth_token
    )

    response = client.get("/api/v1/profiles/me/dashboard", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["profile"]["name"] == "Sarah Chen"
    assert [c["id"] for c in data["communities"]] == [community.id]
    assert [e["id"] for e in data["events"]] == [test_event.id]
    assert data["connections"][0]["addressee_id"] == other_user.id


def test_update_rejects_null_for_required_fields(client, auth_token) -> None:
    """Sending null for a required field is a validation error and stores nothing."""
    for field in ("role", "skills", "interests", "preferred_meeting_style"):
        response = client.patch("/api/v1/profiles/me", json={field: None}, headers=auth_token)
        assert response.status_code == 422, field

    me = client.get("/api/v1/profiles/me", headers=auth_token).json()
    assert me["role"] == "mentor"
    assert me["skills"] == ["Python", "Woodworking"]

    search = client.get("/api/v1/search/", params={"q": ""})
    assert search.status_code == status.HTTP_200_OK
    assert [p["name"] for p in search.json()["people"]] == ["Sarah Chen"]


def test_update_can_clear_optional_fields(client, auth_token) -> None:
    response = client.patch("/api/v1/profiles/me", json={"bio": None}, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["bio"] is None
