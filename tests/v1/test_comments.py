# tests/v1/test_comments.py
"""Tests for comment endpoints."""

from fastapi import status

from askit.models import Comment


def test_create_comment_and_reply(client, test_post, other_user, other_auth_token, category):
    r = client.post(
        "/api/v1/comments",
        json={
            "content": "Here is my answer",
            "category": "answer",
            "author_id": other_user.id,
            "post_id": test_post.id,
            "tags": [{"key": "Discrete Math", "category_id": category.id}],
            "files": [{"title": "work", "source": "https://uploads.ufpr.br/work.png"}],
        },
        headers=other_auth_token,
    )
    assert r.status_code == status.HTTP_201_CREATED
    parent = r.json()["data"]
    assert parent["parent_comment_id"] is None
    assert [t["key"] for t in parent["tags"]] == ["Discrete Math"]
    assert parent["files"][0]["post_id"] == test_post.id
    assert parent["files"][0]["comment_id"] == parent["id"]

    r = client.post(
        "/api/v1/comments",
        json={
            "content": "Thanks!",
            "category": "reply",
            "author_id": other_user.id,
            "post_id": test_post.id,
            "parent_comment_id": parent["id"],
        },
        headers=other_auth_token,
    )
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["data"]["parent_comment_id"] == parent["id"]


def test_reply_must_share_the_post(client, db_session, test_user, auth_token, test_comment):
    from askit.models import Post

    other_post = Post(title="Elsewhere", content=None, author_id=test_user.id)
    db_session.add(other_post)
    db_session.flush()

    r = client.post(
        "/api/v1/comments",
        json={
            "category": "reply",
            "author_id": test_user.id,
            "post_id": other_post.id,
            "parent_comment_id": test_comment.id,
        },
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json()["error"]["type"] == "ValidationError"


def test_comment_on_unknown_post(client, test_user, auth_token):
    r = client.post(
        "/api/v1/comments",
        json={"category": "answer", "author_id": test_user.id, "post_id": 424242},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_list_comments_by_post(client, test_comment, test_post):
    r = client.get("/api/v1/comments", params={"post_id": test_post.id})
    assert r.status_code == status.HTTP_200_OK
    assert [c["id"] for c in r.json()["data"]] == [test_comment.id]


def test_update_comment_by_owner(client, test_comment, other_auth_token, auth_token):
    url = f"/api/v1/comments/{test_comment.id}"
    r = client.put(url, json={"content": "edited"}, headers=auth_token)
    assert r.status_code == status.HTTP_401_UNAUTHORIZED

    r = client.put(url, json={"content": "edited"}, headers=other_auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["data"]["content"] == "edited"


def test_deleting_comment_removes_replies(client, db_session, test_comment, other_user, other_auth_token):
    reply = Comment(
        content="nested",
        category="reply",
        author_id=other_user.id,
        post_id=test_comment.post_id,
        parent_comment_id=test_comment.id,
    )
    db_session.add(reply)
    db_session.flush()

    r = client.delete(f"/api/v1/comments/{test_comment.id}", headers=other_auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert db_session.query(Comment).count() == 0


def test_comment_with_unknown_tag_category_uploads_nothing(
    client, db_session, test_post, other_user, other_auth_token, file_host
):
    r = client.post(
        "/api/v1/comments",
        json={
            "content": "See attached",
            "category": "answer",
            "author_id": other_user.id,
            "post_id": test_post.id,
            "tags": [{"key": "x", "category_id": 999}],
            "files": [{"title": "work", "source": "https://uploads.ufpr.br/work.png"}],
        },
        headers=other_auth_token,
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert file_host.uploads == []
    assert db_session.query(Comment).count() == 0
