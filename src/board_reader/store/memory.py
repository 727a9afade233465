"""
In-memory read store for testing.

This module provides a store that keeps threads and posts in dictionaries.
It is used by:
- Unit tests of the reader that need no database
- Tests that simulate storage failures or concurrent writes

Invariants:
    - Answers the same queries as SqlStore with the same ordering
    - Counters are derived from the stored posts on every read
    - All data is lost on process exit
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import replace

from board_reader.core.errors import StorageError

from .base import JoinedThread, PostRecord, ThreadFacts, ThreadRecord

logger = logging.getLogger(__name__)


class MemoryStore:
    """In-memory implementation of ReadStore.

    Attributes:
        after_join: Optional hook called with the thread id right after the
            joined thread has been read and before replies are read. Tests
            use it to insert posts "concurrently".
        failing: Names of store operations that raise ``StorageError``.

    Example:
        >>> store = MemoryStore()
        >>> store.add_thread(ThreadRecord(id=1, board="a"))
        >>> store.add_post(PostRecord(id=1, op=1, body="hello"))
        >>> store.get_joined_thread(1).thread.post_ctr
        0
    """

    def __init__(self) -> None:
        self._threads: dict[int, ThreadRecord] = {}
        self._posts: dict[int, PostRecord] = {}
        self._lock = threading.Lock()
        self.after_join: Callable[[int], None] | None = None
        self.failing: set[str] = set()

    # Write helpers used by tests and fixtures

    def add_thread(self, thread: ThreadRecord) -> None:
        with self._lock:
            self._threads[thread.id] = thread

    def add_post(self, post: PostRecord) -> None:
        with self._lock:
            self._posts[post.id] = post

    # ReadStore surface

    def thread_facts(self, thread_id: int) -> ThreadFacts | None:
        self._check("thread_facts")
        thread = self._threads.get(thread_id)
        if thread is None:
            return None
        return ThreadFacts(board=thread.board, deleted=thread.deleted)

    def get_post(self, post_id: int) -> PostRecord | None:
        self._check("get_post")
        return self._posts.get(post_id)

    def get_joined_thread(self, thread_id: int) -> JoinedThread | None:
        self._check("get_joined_thread")
        with self._lock:
            joined = self._join(thread_id)
        if self.after_join is not None:
            self.after_join(thread_id)
        return joined

    def get_replies(self, thread_id: int, limit: int | None = None) -> list[PostRecord]:
        self._check("get_replies")
        if limit is not None and limit <= 0:
            return []
        with self._lock:
            replies = sorted(
                (p for p in self._posts.values() if p.op == thread_id and not p.is_op),
                key=lambda p: (p.time, p.id),
            )
        if limit is not None:
            replies = replies[-limit:]
        return replies

    def get_board_threads(self, board: str) -> list[JoinedThread]:
        self._check("get_board_threads")
        return self._joined_where(lambda thread: thread.board == board)

    def get_all_threads(self, exclude_boards: Sequence[str] = ()) -> list[JoinedThread]:
        self._check("get_all_threads")
        excluded = set(exclude_boards)
        return self._joined_where(lambda thread: thread.board not in excluded)

    def board_counter(self, board: str) -> int:
        self._check("board_counter")
        with self._lock:
            return sum(
                1 for p in self._posts.values()
                if p.op in self._threads and self._threads[p.op].board == board
            )

    def post_counter(self, exclude_boards: Sequence[str] = ()) -> int:
        self._check("post_counter")
        excluded = set(exclude_boards)
        with self._lock:
            return sum(
                1 for p in self._posts.values()
                if p.op in self._threads and self._threads[p.op].board not in excluded
            )

    # Internals

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            logger.debug("Simulating failure of %s", operation)
            raise StorageError(f"{operation} failed")

    def _join(self, thread_id: int) -> JoinedThread | None:
        thread = self._threads.get(thread_id)
        op = self._posts.get(thread_id)
        if thread is None or op is None:
            return None
        posts = [p for p in self._posts.values() if p.op == thread_id]
        image_ctr = sum(1 for p in posts if not p.is_op and p.image is not None)
        return JoinedThread(
            thread=replace(thread, post_ctr=len(posts) - 1, image_ctr=image_ctr),
            op=op,
        )

    def _joined_where(self, keep: Callable[[ThreadRecord], bool]) -> list[JoinedThread]:
        with self._lock:
            threads = sorted(
                (t for t in self._threads.values() if keep(t)),
                key=lambda t: (t.bump_time, t.id),
                reverse=True,
            )
            joined = [self._join(t.id) for t in threads]
        return [j for j in joined if j is not None]
