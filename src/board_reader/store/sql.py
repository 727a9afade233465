"""SQLAlchemy implementation of the read-side store."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from board_reader.core.errors import StorageError
from board_reader.models import Post, Thread

from .base import (
    ImageRecord,
    JoinedThread,
    ModerationEntryRecord,
    PostRecord,
    ThreadFacts,
    ThreadRecord,
)

__all__ = ["SqlStore", "to_post_record"]

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store query %s failed: %s", operation, exc)
        raise StorageError(f"{operation} failed") from exc


def to_post_record(post: Post) -> PostRecord:
    """Snapshot an ORM post into an immutable record."""
    image = None
    if post.image_src is not None:
        image = ImageRecord(
            src=post.image_src,
            file_type=post.image_file_type or 0,
            thumb_type=post.image_thumb_type or 0,
            spoiler=bool(post.image_spoiler),
            name=post.image_name,
            size=post.image_size,
        )
    return PostRecord(
        id=post.id,
        op=post.op,
        time=post.time,
        body=post.body,
        name=post.name,
        trip=post.trip,
        ip=post.ip,
        image=image,
        deleted=bool(post.deleted),
        img_deleted=bool(post.img_deleted),
        mod=tuple(
            ModerationEntryRecord(
                type=entry.type,
                by=entry.by,
                reason=entry.reason,
                time=entry.time,
            )
            for entry in post.moderation
        ),
    )


def _joined_threads() -> Select:
    """Build the thread/OP equality join with counters merged in.

    The counters are correlated scalar subqueries of the same statement, so
    they are read in the same snapshot as the thread row and its OP.
    """
    counted = aliased(Post)
    post_ctr = (
        select(func.count(counted.id))
        .where(counted.op == Thread.id)
        .correlate(Thread)
        .scalar_subquery()
    ) - 1
    image_ctr = (
        select(func.count(counted.id))
        .where(
            counted.op == Thread.id,
            counted.id != Thread.id,
            counted.image_src.is_not(None),
        )
        .correlate(Thread)
        .scalar_subquery()
    )
    return select(
        Thread,
        Post,
        post_ctr.label("post_ctr"),
        image_ctr.label("image_ctr"),
    ).join(Post, Post.id == Thread.id)


class SqlStore:
    """Store backed by a SQLAlchemy session.

    The session is owned by the caller; this class only composes and issues
    queries through it.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def thread_facts(self, thread_id: int) -> ThreadFacts | None:
        with _storage_errors("thread_facts"):
            row = self.session.execute(
                select(Thread.board, Thread.deleted).where(Thread.id == thread_id)
            ).first()
        if row is None:
            return None
        return ThreadFacts(board=row.board, deleted=bool(row.deleted))

    def get_post(self, post_id: int) -> PostRecord | None:
        with _storage_errors("get_post"):
            post = self.session.execute(
                select(Post).where(Post.id == post_id)
            ).scalars().first()
            if post is None:
                return None
            return to_post_record(post)

    def get_joined_thread(self, thread_id: int) -> JoinedThread | None:
        """Return the thread joined with its OP and counters.

        Replies are read by a separate statement (:meth:`get_replies`), so a
        post inserted between the two reads shows up in one and not the
        other. Counters may therefore differ from the number of replies
        returned until the next read.
        """
        with _storage_errors("get_joined_thread"):
            row = self.session.execute(
                _joined_threads().where(Thread.id == thread_id)
            ).first()
            if row is None:
                return None
            return self._to_joined(row)

    def get_replies(self, thread_id: int, limit: int | None = None) -> list[PostRecord]:
        if limit is not None and limit <= 0:
            return []
        stmt = select(Post).where(Post.op == thread_id, Post.id != thread_id)
        with _storage_errors("get_replies"):
            if limit is None:
                posts = self.session.execute(
                    stmt.order_by(Post.time, Post.id)
                ).scalars().all()
            else:
                # Newest first to take the trailing window, then restore order.
                posts = self.session.execute(
                    stmt.order_by(Post.time.desc(), Post.id.desc()).limit(limit)
                ).scalars().all()
                posts = list(reversed(posts))
            return [to_post_record(post) for post in posts]

    def get_board_threads(self, board: str) -> list[JoinedThread]:
        stmt = _joined_threads().where(Thread.board == board)
        return self._list_joined("get_board_threads", stmt)

    def get_all_threads(self, exclude_boards: Sequence[str] = ()) -> list[JoinedThread]:
        stmt = _joined_threads()
        if exclude_boards:
            stmt = stmt.where(Thread.board.not_in(list(exclude_boards)))
        return self._list_joined("get_all_threads", stmt)

    def board_counter(self, board: str) -> int:
        with _storage_errors("board_counter"):
            count = self.session.execute(
                select(func.count(Post.id))
                .join(Thread, Thread.id == Post.op)
                .where(Thread.board == board)
            ).scalar_one()
        return int(count)

    def post_counter(self, exclude_boards: Sequence[str] = ()) -> int:
        stmt = select(func.count(Post.id)).join(Thread, Thread.id == Post.op)
        if exclude_boards:
            stmt = stmt.where(Thread.board.not_in(list(exclude_boards)))
        with _storage_errors("post_counter"):
            count = self.session.execute(stmt).scalar_one()
        return int(count)

    def _list_joined(self, operation: str, stmt: Select) -> list[JoinedThread]:
        stmt = stmt.order_by(Thread.bump_time.desc(), Thread.id.desc())
        with _storage_errors(operation):
            rows = self.session.execute(stmt).all()
            return [self._to_joined(row) for row in rows]

    @staticmethod
    def _to_joined(row) -> JoinedThread:
        thread, op, post_ctr, image_ctr = row
        return JoinedThread(
            thread=ThreadRecord(
                id=thread.id,
                board=thread.board,
                subject=thread.subject,
                time=thread.time,
                bump_time=thread.bump_time,
                deleted=bool(thread.deleted),
                post_ctr=int(post_ctr),
                image_ctr=int(image_ctr),
            ),
            op=to_post_record(op),
        )
