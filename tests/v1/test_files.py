# tests/v1/test_files.py
"""Tests for standalone attachment endpoints."""

from fastapi import status

from askit.models import File, Post

SOURCE = "https://uploads.ufpr.br/answer.png"


def _upload(client, headers, **overrides):
    payload = {"title": "answer", "source": SOURCE}
    payload.update(overrides)
    return client.post("/api/v1/files", json=payload, headers=headers)


def test_post_author_uploads_file(client, db_session, test_post, auth_token, file_host):
    r = _upload(client, auth_token, post_id=test_post.id)
    assert r.status_code == status.HTTP_201_CREATED
    data = r.json()["data"]
    assert data["post_id"] == test_post.id
    assert data["comment_id"] is None
    assert data["remote_url"] == "https://res.example.com/AskIt/1-answer.png"
    assert file_host.uploads == [SOURCE]
    assert db_session.query(File).count() == 1


def test_failed_upload_leaves_no_row(client, db_session, test_post, auth_token, file_host):
    file_host.fail = True
    r = _upload(client, auth_token, post_id=test_post.id)
    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json()["error"]["type"] == "InternalError"
    assert db_session.query(File).count() == 0


def test_local_paths_are_rejected(client, test_post, auth_token, file_host):
    r = _upload(client, auth_token, post_id=test_post.id, source="/etc/passwd")
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert "source" in r.json()["error"]["message"]
    assert file_host.uploads == []


def test_comment_file_belongs_to_comment_author(
    client, test_post, test_comment, auth_token, other_auth_token
):
    r = _upload(client, auth_token, post_id=test_post.id, comment_id=test_comment.id)
    assert r.status_code == status.HTTP_401_UNAUTHORIZED

    r = _upload(client, other_auth_token, post_id=test_post.id, comment_id=test_comment.id)
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["data"]["comment_id"] == test_comment.id


def test_comment_must_belong_to_post(client, db_session, test_user, test_comment, other_auth_token):
    elsewhere = Post(title="Elsewhere", content=None, author_id=test_user.id)
    db_session.add(elsewhere)
    db_session.flush()

    r = _upload(client, other_auth_token, post_id=elsewhere.id, comment_id=test_comment.id)
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_upload_to_missing_post(client, auth_token):
    r = _upload(client, auth_token, post_id=4242)
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["error"]["message"] == "Post 4242 not found"


def test_replace_file_reuploads(client, test_post, auth_token, file_host):
    file_id = _upload(client, auth_token, post_id=test_post.id).json()["data"]["id"]

    r = client.put(
        f"/api/v1/files/{file_id}",
        json={"title": "corrected", "source": "https://uploads.ufpr.br/fixed.png"},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    data = r.json()["data"]
    assert data["title"] == "corrected"
    assert data["remote_url"].endswith("2-fixed.png")
    assert len(file_host.uploads) == 2


def test_replace_file_requires_owner(client, test_post, auth_token, other_auth_token):
    file_id = _upload(client, auth_token, post_id=test_post.id).json()["data"]["id"]
    r = client.put(
        f"/api/v1/files/{file_id}",
        json={"title": "mine now", "source": SOURCE},
        headers=other_auth_token,
    )
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_get_and_delete(client, db_session, test_post, auth_token):
    file_id = _upload(client, auth_token, post_id=test_post.id).json()["data"]["id"]

    assert [f["id"] for f in client.get("/api/v1/files").json()["data"]] == [file_id]
    assert client.get(f"/api/v1/files/{file_id}").json()["data"]["title"] == "answer"

    r = client.delete(f"/api/v1/files/{file_id}", headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert db_session.query(File).count() == 0
    assert client.get(f"/api/v1/files/{file_id}").status_code == status.HTTP_404_NOT_FOUND
