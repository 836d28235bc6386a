# tests/v1/test_reactions.py
"""Tests for post and comment reactions."""

from fastapi import status

from askit.models import CommentReaction, PostReaction

from tests.conftest import auth_headers


def test_second_upsert_changes_type(client, db_session, test_user, auth_token, test_post):
    payload = {"author_id": test_user.id, "target_id": test_post.id, "type": "UPVOTE"}
    first = client.post("/api/v1/post-reactions", json=payload, headers=auth_token)
    assert first.status_code == status.HTTP_201_CREATED

    payload["type"] = "DOWNVOTE"
    second = client.post("/api/v1/post-reactions", json=payload, headers=auth_token)
    assert second.status_code == status.HTTP_200_OK
    assert second.json()["data"]["id"] == first.json()["data"]["id"]

    rows = db_session.query(PostReaction).all()
    assert len(rows) == 1
    assert rows[0].type.value == "DOWNVOTE"


def test_reaction_response_shape(client, test_user, auth_token, test_post):
    r = client.post(
        "/api/v1/post-reactions",
        json={"author_id": test_user.id, "target_id": test_post.id, "type": "UPVOTE"},
        headers=auth_token,
    )
    data = r.json()["data"]
    assert data["target_id"] == test_post.id
    assert data["author"] == {"id": test_user.id, "name": test_user.name}
    assert data["target"]["id"] == test_post.id
    assert data["target"]["title"] == test_post.title


def test_reaction_for_someone_else_is_rejected(client, test_user, other_auth_token, test_post):
    r = client.post(
        "/api/v1/post-reactions",
        json={"author_id": test_user.id, "target_id": test_post.id, "type": "UPVOTE"},
        headers=other_auth_token,
    )
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_reaction_to_unknown_target(client, test_user, auth_token):
    r = client.post(
        "/api/v1/comment-reactions",
        json={"author_id": test_user.id, "target_id": 31337, "type": "UPVOTE"},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["error"]["message"] == "Comment 31337 not found"


def test_invalid_reaction_type(client, test_user, auth_token, test_post):
    r = client.post(
        "/api/v1/post-reactions",
        json={"author_id": test_user.id, "target_id": test_post.id, "type": "MEH"},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_comment_reactions_are_separate(client, db_session, test_user, auth_token, test_comment):
    r = client.post(
        "/api/v1/comment-reactions",
        json={"author_id": test_user.id, "target_id": test_comment.id, "type": "UPVOTE"},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_201_CREATED
    assert db_session.query(CommentReaction).count() == 1
    assert db_session.query(PostReaction).count() == 0


def test_listing_requires_moderator(client, auth_token, moderator_token):
    assert client.get("/api/v1/post-reactions", headers=auth_token).status_code == 401
    r = client.get("/api/v1/post-reactions", headers=moderator_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["data"] == []


def test_reactions_by_author_and_delete(client, test_user, auth_token, other_auth_token, test_post):
    created = client.post(
        "/api/v1/post-reactions",
        json={"author_id": test_user.id, "target_id": test_post.id, "type": "UPVOTE"},
        headers=auth_token,
    ).json()["data"]

    r = client.get(f"/api/v1/post-reactions/author/{test_user.id}", headers=other_auth_token)
    assert r.status_code == status.HTTP_401_UNAUTHORIZED
    r = client.get(f"/api/v1/post-reactions/author/{test_user.id}", headers=auth_token)
    assert [row["id"] for row in r.json()["data"]] == [created["id"]]

    url = f"/api/v1/post-reactions/{created['id']}"
    assert client.delete(url, headers=other_auth_token).status_code == status.HTTP_401_UNAUTHORIZED
    assert client.delete(url, headers=auth_token).status_code == status.HTTP_200_OK
    assert client.get(url).status_code == status.HTTP_404_NOT_FOUND


def test_reaction_by_deleted_account_is_not_found(client, db_session, make_user, test_post):
    gone = make_user("Gone")
    headers = auth_headers(gone)
    db_session.delete(gone)
    db_session.flush()

    r = client.post(
        "/api/v1/post-reactions",
        json={"author_id": gone.id, "target_id": test_post.id, "type": "UPVOTE"},
        headers=headers,
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["error"]["message"] == f"User {gone.id} not found"
    assert db_session.query(PostReaction).count() == 0
