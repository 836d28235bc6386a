# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status

from askit.models import Comment, File, Post

from tests.conftest import auth_headers


def _url(name: str) -> str:
    return f"https://uploads.ufpr.br/{name}"


def _post_payload(author_id: int, **overrides) -> dict:
    payload = {
        "title": "Exam 2 - 2022/2",
        "content": "Discrete math, second exam",
        "author_id": author_id,
        "tags": [],
        "files": [],
    }
    payload.update(overrides)
    return payload


def test_create_post_then_fetch_with_tags_and_files(client, test_user, auth_token, category, file_host):
    r = client.post(
        "/api/v1/posts",
        json=_post_payload(
            test_user.id,
            tags=[
                {"key": "Discrete Math", "category_id": category.id},
                {"key": "Prof. Menotti", "category_id": category.id},
            ],
            files=[{"title": "page 1", "source": _url("page1.png")}],
        ),
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_201_CREATED
    created = r.json()["data"]
    assert file_host.uploads == [_url("page1.png")]

    r = client.get(f"/api/v1/posts/{created['id']}")
    assert r.status_code == status.HTTP_200_OK
    data = r.json()["data"]
    assert data["title"] == "Exam 2 - 2022/2"
    assert data["author"] == {"id": test_user.id, "name": test_user.name}
    assert sorted(t["key"] for t in data["tags"]) == ["Discrete Math", "Prof. Menotti"]
    assert len(data["files"]) == 1
    assert data["files"][0]["title"] == "page 1"
    assert data["files"][0]["remote_url"].startswith("https://")


def test_get_unknown_post_is_404(client):
    r = client.get("/api/v1/posts/999999")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    body = r.json()
    assert body["response"] == "Error"
    assert body["error"]["type"] == "NotFoundError"
    assert body["error"]["path"] == "/api/v1/posts/999999"


def test_create_post_for_someone_else_is_rejected(client, db_session, test_user, other_auth_token):
    r = client.post("/api/v1/posts", json=_post_payload(test_user.id), headers=other_auth_token)
    assert r.status_code == status.HTTP_401_UNAUTHORIZED
    assert db_session.query(Post).count() == 0


def test_unknown_tag_category_uploads_nothing(client, db_session, test_user, auth_token, file_host):
    r = client.post(
        "/api/v1/posts",
        json=_post_payload(
            test_user.id,
            tags=[{"key": "x", "category_id": 999}],
            files=[{"title": "scan", "source": _url("scan.png")}],
        ),
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["error"]["message"] == "Tag category 999 not found"
    assert file_host.uploads == []
    assert db_session.query(Post).count() == 0


def test_failed_upload_stores_nothing(client, db_session, test_user, auth_token, file_host):
    file_host.fail = True
    r = client.post(
        "/api/v1/posts",
        json=_post_payload(test_user.id, files=[{"title": "scan", "source": _url("scan.png")}]),
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json()["error"]["message"] == "File upload failed"
    assert db_session.query(Post).count() == 0
    assert db_session.query(File).count() == 0


def test_list_posts_filters_by_author(client, test_post, other_user, db_session):
    db_session.add(Post(title="Other", content=None, author_id=other_user.id))
    db_session.flush()

    r = client.get("/api/v1/posts", params={"author_id": test_post.author_id})
    assert r.status_code == status.HTTP_200_OK
    assert [p["id"] for p in r.json()["data"]] == [test_post.id]


def test_update_post_replaces_tags(client, test_post, auth_token, category):
    url = f"/api/v1/posts/{test_post.id}"
    client.put(url, json={"tags": [{"key": "a", "category_id": category.id}]}, headers=auth_token)
    r = client.put(
        url,
        json={"title": "Renamed", "tags": [{"key": "b", "category_id": category.id}]},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    data = r.json()["data"]
    assert data["title"] == "Renamed"
    assert [t["key"] for t in data["tags"]] == ["b"]


def test_update_post_replaces_files(client, test_post, auth_token, file_host):
    url = f"/api/v1/posts/{test_post.id}"
    r = client.put(
        url,
        json={"files": [{"title": "one", "source": _url("1.png")}, {"title": "two", "source": _url("2.png")}]},
        headers=auth_token,
    )
    files = r.json()["data"]["files"]
    keep = files[0]["id"]

    r = client.put(
        url,
        json={"files": [{"id": keep, "title": "one renamed"}, {"title": "three", "source": _url("3.png")}]},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    titles = sorted(f["title"] for f in r.json()["data"]["files"])
    assert titles == ["one renamed", "three"]
    assert file_host.uploads == [_url("1.png"), _url("2.png"), _url("3.png")]


def test_update_post_requires_owner(client, test_post, other_auth_token):
    r = client.put(f"/api/v1/posts/{test_post.id}", json={"title": "Hijacked"}, headers=other_auth_token)
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_disconnect_tag(client, test_post, auth_token, category):
    url = f"/api/v1/posts/{test_post.id}"
    r = client.put(url, json={"tags": [{"key": "keep", "category_id": category.id}, {"key": "drop", "category_id": category.id}]}, headers=auth_token)
    drop_id = next(t["id"] for t in r.json()["data"]["tags"] if t["key"] == "drop")

    r = client.delete(f"{url}/tags/{drop_id}", headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert [t["key"] for t in r.json()["data"]["tags"]] == ["keep"]

    r = client.delete(f"{url}/tags/{drop_id}", headers=auth_token)
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_moderator_can_delete_post_with_comments(client, db_session, test_post, test_comment, moderator_token):
    r = client.delete(f"/api/v1/posts/{test_post.id}", headers=moderator_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["data"]["id"] == test_post.id
    assert db_session.query(Post).count() == 0
    assert db_session.query(Comment).count() == 0


def test_stranger_cannot_delete_post(client, test_post, other_user):
    r = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_headers(other_user))
    assert r.status_code == status.HTTP_401_UNAUTHORIZED
