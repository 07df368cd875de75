# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post, comment and like endpoints."""

from fastapi import status


def test_get_post_page(client, test_post) -> None:
    """A post page carries the post and an empty thread."""
    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["post"]["id"] == test_post.id
    assert data["post"]["author"] == {"name": "Sarah Chen", "age": 67, "role": "mentor"}
    assert data["comments"] == []


def test_get_missing_post(client) -> None:
    response = client.get("/api/v1/posts/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Post not found"


def test_comment_updates_reply_count(client, test_post, other_auth_token) -> None:
    """Replies are counted from stored comments."""
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "  Thanks!  "},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["content"] == "Thanks!"

    page = client.get(f"/api/v1/posts/{test_post.id}").json()
    assert page["post"]["replies"] == 1
    assert page["comments"][0]["author"]["name"] == "James Park"


def test_blank_comment_rejected(client, test_post, auth_token) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "   "},
        headers=auth_token,
    )
    assert response.status_code == 422


def test_toggle_like(client, test_post, other_auth_token) -> None:
    """Liking twice removes the like; the count comes back from the store."""
    url = f"/api/v1/posts/{test_post.id}/like"
    first = client.post(url, headers=other_auth_token)
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"post_id": test_post.id, "liked": True, "likes": 1}

    second = client.post(url, headers=other_auth_token)
    assert second.json() == {"post_id": test_post.id, "liked": False, "likes": 0}


def test_like_missing_post(client, auth_token) -> None:
    response = client.post("/api/v1/posts/missing/like", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_like_comment(client, test_post, auth_token) -> None:
    """Comment likes are incremented in the store."""
    comment = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Nice"},
        headers=auth_token,
    ).json()

    response = client.post(f"/api/v1/comments/{comment['id']}/like", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"comment_id": comment["id"], "likes": 1}


def test_like_missing_comment(client, auth_token) -> None:
    response = client.post("/api/v1/comments/missing/like", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Comment not found"
