# tests/v1/test_posts.py
"""Tests for post-related endpoints."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status

from murmur.models import Comment, Post


def test_create_post_success(client, alice, alice_headers) -> None:
    """Test successful post creation."""
    response = client.post(
        "/api/posts/create",
        json={"text": "Hello murmur", "username": "alice", "image": "uploads/1-cat.png"},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["text"] == "Hello murmur"
    assert data["owner_id"] == str(alice.id)
    assert data["username"] == "alice"
    assert data["image"] == "uploads/1-cat.png"
    assert data["likes"] == []
    assert "created_at" in data


def test_create_post_optional_fields_default_to_null(client, alice_headers) -> None:
    response = client.post("/api/posts/create", json={"text": "plain"}, headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["username"] is None
    assert data["image"] is None


@pytest.mark.parametrize("body", [{"text": ""}, {}, {"username": "alice"}])
def test_create_post_requires_text(client, alice_headers, count_rows, body) -> None:
    """Empty or missing text is rejected and nothing is stored."""
    response = client.post("/api/posts/create", json=body, headers=alice_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    errors = response.json()["errors"]
    assert any(error["param"] == "text" for error in errors)
    assert errors[0]["msg"] == "Text is required"
    assert count_rows(Post) == 0


def test_create_post_for_unknown_user(client, headers_for, count_rows) -> None:
    """A valid token for a user that does not exist cannot create content."""
    headers = headers_for(uuid.uuid4())
    response = client.post("/api/posts/create", json={"text": "ghost"}, headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"msg": "User not found"}
    assert count_rows(Post) == 0


def test_list_posts_newest_first(client, db_session, alice, alice_headers) -> None:
    """Posts are ordered by creation time regardless of insertion order."""
    base = datetime(2024, 1, 1, tzinfo=UTC)
    for offset, text in [(1, "middle"), (2, "newest"), (0, "oldest")]:
        db_session.add(
            Post(owner_id=alice.id, text=text, created_at=base + timedelta(hours=offset))
        )
    db_session.commit()

    response = client.get("/api/posts", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [post["text"] for post in response.json()] == ["newest", "middle", "oldest"]


def test_list_posts_empty(client, alice_headers) -> None:
    response = client.get("/api/posts", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_get_specific_post(client, alice_post, bob_headers) -> None:
    """Any authenticated user can read a post."""
    response = client.get(f"/api/posts/{alice_post.id}", headers=bob_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == str(alice_post.id)
    assert data["text"] == alice_post.text


def test_get_nonexistent_post(client, alice_headers) -> None:
    response = client.get(f"/api/posts/{uuid.uuid4()}", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"msg": "Post not found"}


def test_get_post_with_malformed_id(client, alice_headers) -> None:
    """An id that cannot be parsed is reported as not found."""
    response = client.get("/api/posts/not-an-id", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"msg": "Post not found"}


def test_update_post_round_trip(client, alice_headers) -> None:
    created = client.post("/api/posts/create", json={"text": "T"}, headers=alice_headers).json()

    fetched = client.get(f"/api/posts/{created['id']}", headers=alice_headers).json()
    assert fetched["text"] == "T"

    updated = client.put(
        f"/api/posts/{created['id']}", json={"text": "T prime"}, headers=alice_headers
    )
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["text"] == "T prime"

    fetched = client.get(f"/api/posts/{created['id']}", headers=alice_headers).json()
    assert fetched["text"] == "T prime"


def test_update_post_by_non_owner(client, alice_post, bob_headers, fetch) -> None:
    response = client.put(
        f"/api/posts/{alice_post.id}", json={"text": "hijacked"}, headers=bob_headers
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"msg": "User not authorized"}
    assert fetch(Post, alice_post.id).text == "Alice's first post"


def test_update_post_empty_text(client, alice_post, alice_headers, fetch) -> None:
    response = client.put(f"/api/posts/{alice_post.id}", json={"text": ""}, headers=alice_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert fetch(Post, alice_post.id).text == "Alice's first post"


def test_update_nonexistent_post(client, alice_headers) -> None:
    response = client.put(f"/api/posts/{uuid.uuid4()}", json={"text": "x"}, headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_own_post(client, alice_post, alice_headers, fetch) -> None:
    response = client.delete(f"/api/posts/{alice_post.id}", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"msg": "Post deleted"}
    assert fetch(Post, alice_post.id) is None


def test_delete_other_post(client, alice_post, bob_headers, fetch) -> None:
    """Test deleting a post by someone other than the author."""
    response = client.delete(f"/api/posts/{alice_post.id}", headers=bob_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"msg": "User not authorized"}
    assert fetch(Post, alice_post.id) is not None


def test_delete_nonexistent_post(client, alice_headers) -> None:
    response = client.delete(f"/api/posts/{uuid.uuid4()}", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_post_keeps_comments(client, alice_post, bob_comment, alice_headers, fetch) -> None:
    """Comments are not cascaded when their post is deleted."""
    response = client.delete(f"/api/posts/{alice_post.id}", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert fetch(Comment, bob_comment.id) is not None


def test_comment_via_post_route(client, alice_post, bob, bob_headers) -> None:
    """The alternate route on the post router creates a comment."""
    response = client.post(
        f"/api/posts/{alice_post.id}", json={"text": "Nice post"}, headers=bob_headers
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["post_id"] == str(alice_post.id)
    assert data["owner_id"] == str(bob.id)
    assert data["owner"]["username"] == "bob"


def test_comment_via_post_route_missing_post(client, bob_headers, count_rows) -> None:
    response = client.post(f"/api/posts/{uuid.uuid4()}", json={"text": "hi"}, headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert count_rows(Comment) == 0


def test_list_post_comments_resolves_usernames(client, alice_post, bob_comment, alice_headers):
    response = client.get(f"/api/posts/{alice_post.id}/comments", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 1
    assert data[0]["text"] == bob_comment.text
    assert data[0]["owner"] == {"id": str(bob_comment.owner_id), "username": "bob"}


def test_list_post_comments_missing_post(client, alice_headers) -> None:
    response = client.get(f"/api/posts/{uuid.uuid4()}/comments", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


class TestLikes:
    """Liking and unliking posts."""

    def test_like_post(self, client, alice_post, bob, bob_headers) -> None:
        response = client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [str(bob.id)]

        post = client.get(f"/api/posts/{alice_post.id}", headers=bob_headers).json()
        assert post["likes"] == [str(bob.id)]

    def test_like_twice_rejected(self, client, alice_post, bob_headers) -> None:
        client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)
        response = client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["msg"] == "Post already liked"

    def test_unlike_post(self, client, alice_post, alice, alice_headers, bob_headers) -> None:
        client.put(f"/api/posts/{alice_post.id}/like", headers=alice_headers)
        client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)

        response = client.put(f"/api/posts/{alice_post.id}/unlike", headers=bob_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [str(alice.id)]

    def test_unlike_without_like(self, client, alice_post, bob_headers) -> None:
        response = client.put(f"/api/posts/{alice_post.id}/unlike", headers=bob_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["msg"] == "Post has not yet been liked"

    def test_like_missing_post(self, client, bob_headers) -> None:
        response = client.put(f"/api/posts/{uuid.uuid4()}/like", headers=bob_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_likes_removed_with_post(self, client, alice_post, alice_headers, bob_headers, count_rows):
        from murmur.models import PostLike

        client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)
        assert count_rows(PostLike) == 1
        client.delete(f"/api/posts/{alice_post.id}", headers=alice_headers)
        assert count_rows(PostLike) == 0

    def test_concurrent_like_reported_as_already_liked(
        self, client, alice_post, bob_headers, monkeypatch
    ) -> None:
        """A like that loses the race on the composite key is not a generic conflict."""
        from murmur.core.errors import StoreError, StoreErrorKind
        from murmur.repositories.post_repo import PostRepository

        def conflicting_add_like(self, post, user_id):
            raise StoreError(StoreErrorKind.CONFLICT, "Post", "UNIQUE constraint failed")

        monkeypatch.setattr(PostRepository, "add_like", conflicting_add_like)

        response = client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"errors": [{"msg": "Post already liked"}]}

    def test_like_store_failure_is_server_error(
        self, client, alice_post, bob_headers, monkeypatch
    ) -> None:
        from murmur.core.errors import StoreError, StoreErrorKind
        from murmur.repositories.post_repo import PostRepository

        def failing_add_like(self, post, user_id):
            raise StoreError(StoreErrorKind.UNAVAILABLE, "Post", "connection lost")

        monkeypatch.setattr(PostRepository, "add_like", failing_add_like)

        response = client.put(f"/api/posts/{alice_post.id}/like", headers=bob_headers)
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"msg": "Server error"}
