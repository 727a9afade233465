# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterable, Iterator
from typing import Any

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from board_reader.core.security import create_access_token
from board_reader.db.session import Base
from board_reader.db.session import get_db as app_get_session
from board_reader.main import app as fastapi_app
from board_reader.models import ModerationEntry, Post, Thread
from board_reader.services.access import SEE_MNEMONICS, SEE_MODERATION, AccessPolicy, Ident
from board_reader.store import MemoryStore

TEST_DB_URL = "sqlite://"
TEST_IP = "192.0.2.10"
STAFF_BOARD = "staff"
STAFF_CAPABILITY = "accessStaff"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


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
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def policy() -> AccessPolicy:
    """Policy restricting the staff board, as configured by default."""
    return AccessPolicy(restricted_boards={STAFF_BOARD: STAFF_CAPABILITY})


@pytest.fixture()
def anon() -> Ident:
    return Ident.anonymous()


@pytest.fixture()
def moderator() -> Ident:
    return Ident.build("mod", capabilities=[SEE_MODERATION, SEE_MNEMONICS, STAFF_CAPABILITY])


@pytest.fixture()
def mnemonic_viewer() -> Ident:
    return Ident.build("janitor", capabilities=[SEE_MNEMONICS])


@pytest.fixture()
def auth_header() -> Callable[..., dict[str, str]]:
    """Return a factory of authorization headers for arbitrary claims."""

    def _header(
        subject: str,
        capabilities: Iterable[str] = (),
        boards: Iterable[str] = (),
    ) -> dict[str, str]:
        token = create_access_token(subject, capabilities, boards)
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest.fixture()
def moderator_headers(auth_header: Callable[..., dict[str, str]]) -> dict[str, str]:
    return auth_header("mod", [SEE_MODERATION, SEE_MNEMONICS, STAFF_CAPABILITY])


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Persist a single post; ``image`` sets the image hash."""

    def _make(post_id: int, op: int, **fields: Any) -> Post:
        image = fields.pop("image", None)
        mod = fields.pop("mod", [])
        post = Post(
            id=post_id,
            op=op,
            time=fields.pop("time", post_id),
            body=fields.pop("body", f"post {post_id}"),
            ip=fields.pop("ip", TEST_IP),
            **fields,
        )
        if image is not None:
            post.image_src = image
            post.image_file_type = 1
            post.image_thumb_type = 1
        post.moderation = [ModerationEntry(**entry) for entry in mod]
        db_session.add(post)
        db_session.flush()
        return post

    return _make


@pytest.fixture()
def make_thread(
    db_session: Session,
    make_post: Callable[..., Post],
) -> Callable[..., Thread]:
    """Persist a thread with its OP and ``replies`` replies.

    Reply ids follow the thread id; the first ``images`` replies carry an
    image.
    """

    def _make(
        thread_id: int,
        board: str = "a",
        *,
        replies: int = 0,
        images: int = 0,
        deleted: bool = False,
        bump_time: int | None = None,
    ) -> Thread:
        thread = Thread(
            id=thread_id,
            board=board,
            subject=f"Thread {thread_id}",
            time=thread_id,
            bump_time=thread_id if bump_time is None else bump_time,
            deleted=deleted,
        )
        db_session.add(thread)
        db_session.flush()
        make_post(thread_id, thread_id, body="opening post")
        for i in range(1, replies + 1):
            make_post(
                thread_id + i,
                thread_id,
                body=f"reply {i}",
                image=f"hash-{thread_id + i}" if i <= images else None,
            )
        return thread

    return _make


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()
