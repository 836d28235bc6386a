# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from askit.api.v1.dependencies import get_file_host_dep
from askit.core.errors import InternalError
from askit.core.security import hash_password
from askit.db.session import Base, enable_sqlite_foreign_keys
from askit.db.session import get_db as app_get_session
from askit.main import app as fastapi_app
from askit.models import Comment, Post, Role, TagCategory, User
from askit.services.file_host import UploadResult
from askit.services.tokens import issue_token

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse-battery"

_EMAIL_COUNTER = count(1)


class FakeFileHost:
    """In-memory stand-in for the image host."""

    def __init__(self) -> None:
        self.uploads: list[str] = []
        self.fail = False

    def upload(self, source: str, resource_type: str = "image") -> UploadResult:
        if self.fail:
            raise InternalError("File upload failed")
        self.uploads.append(source)
        name = source.rsplit("/", 1)[-1]
        return UploadResult(secure_url=f"https://res.example.com/AskIt/{len(self.uploads)}-{name}")


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def file_host() -> FakeFileHost:
    return FakeFileHost()


@pytest.fixture(autouse=True)
def override_file_host(app: FastAPI, file_host: FakeFileHost) -> Iterator[None]:
    app.dependency_overrides[get_file_host_dep] = lambda: file_host
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_file_host_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers carrying a fresh token for ``user``."""
    token = issue_token(user.id, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with a known password."""

    def _make_user(name: str = "Test User", role: Role = Role.USER, **fields: Any) -> User:
        user = User(
            name=name,
            email=fields.pop("email", f"user{next(_EMAIL_COUNTER)}@ufpr.br"),
            password=hash_password(fields.pop("password", TEST_PASSWORD)),
            role=role,
            **fields,
        )
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary USER account."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second USER account."""
    return make_user("Other User")


@pytest.fixture()
def moderator(make_user: Callable[..., User]) -> User:
    return make_user("Moderator", role=Role.MODERATOR)


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user("Admin", role=Role.ADMIN)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def moderator_token(moderator: User) -> dict[str, str]:
    return auth_headers(moderator)


@pytest.fixture()
def admin_token(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def category(db_session: Session) -> TagCategory:
    """Create a default tag category."""
    category = TagCategory(title="Subject")
    db_session.add(category)
    db_session.flush()
    db_session.refresh(category)
    return category


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Post:
    """Create a baseline post owned by the primary test user."""
    post = Post(title="Exam 1 - 2022/2", content="Discrete math exam", author_id=test_user.id)
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    return post


@pytest.fixture()
def test_comment(db_session: Session, other_user: User, test_post: Post) -> Comment:
    """Create a comment by the secondary user on the baseline post."""
    comment = Comment(
        content="Question 3 is wrong",
        category="answer",
        author_id=other_user.id,
        post_id=test_post.id,
    )
    db_session.add(comment)
    db_session.flush()
    db_session.refresh(comment)
    return comment
