"""Read-side store surface consumed by the reader.

The reader never talks to a database directly. It is handed an object
implementing :class:`ReadStore`, which exposes the handful of logical queries
the read path needs: lookup by id, lookup by secondary index (posts by thread,
threads by board), the thread/OP equality join with derived counters, and a
trailing-window slice of replies.

Invariants:
    - Records returned here are immutable snapshots; nothing downstream
      mutates them.
    - ``post_ctr`` counts every post of the thread minus the OP.
    - ``image_ctr`` counts replies carrying an image; the OP is excluded.
    - Any failure to execute a query is raised as ``StorageError``. A missing
      record is ``None`` or an empty list, never an exception.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ImageRecord:
    """Content-addressed image attached to a post."""

    src: str
    file_type: int = 0
    thumb_type: int = 0
    spoiler: bool = False
    name: str | None = None
    size: int | None = None


@dataclass(frozen=True)
class ModerationEntryRecord:
    """Stored moderation action applied to a post."""

    type: int
    by: str
    reason: str | None = None
    time: int = 0


@dataclass(frozen=True)
class PostRecord:
    """Raw post as stored, including the poster's address."""

    id: int
    op: int
    time: int = 0
    body: str = ""
    name: str | None = None
    trip: str | None = None
    ip: str | None = None
    image: ImageRecord | None = None
    deleted: bool = False
    img_deleted: bool = False
    mod: tuple[ModerationEntryRecord, ...] = ()

    @property
    def is_op(self) -> bool:
        return self.id == self.op


@dataclass(frozen=True)
class ThreadRecord:
    """Thread metadata with derived counters merged in."""

    id: int
    board: str
    subject: str | None = None
    time: int = 0
    bump_time: int = 0
    deleted: bool = False
    post_ctr: int = 0
    image_ctr: int = 0


@dataclass(frozen=True)
class JoinedThread:
    """One row of the thread/OP equality join."""

    thread: ThreadRecord
    op: PostRecord


@dataclass(frozen=True)
class ThreadFacts:
    """Ownership facts needed to make access decisions about a thread."""

    board: str
    deleted: bool = False


@runtime_checkable
class ReadStore(Protocol):
    """Protocol for read-side store backends."""

    def thread_facts(self, thread_id: int) -> ThreadFacts | None:
        """Return the board and deletion flag of a thread, if it exists."""
        ...

    def get_post(self, post_id: int) -> PostRecord | None:
        """Return a single post by id."""
        ...

    def get_joined_thread(self, thread_id: int) -> JoinedThread | None:
        """Return thread metadata joined with its OP and counters.

        ``None`` unless both halves of the join are present.
        """
        ...

    def get_replies(self, thread_id: int, limit: int | None = None) -> list[PostRecord]:
        """Return the non-OP posts of a thread in creation order.

        With ``limit`` set, only the trailing ``limit`` posts are returned.
        """
        ...

    def get_board_threads(self, board: str) -> list[JoinedThread]:
        """Return every thread of a board joined with its OP."""
        ...

    def get_all_threads(self, exclude_boards: Sequence[str] = ()) -> list[JoinedThread]:
        """Return every thread not on one of ``exclude_boards``."""
        ...

    def board_counter(self, board: str) -> int:
        """Return the number of posts made on a board."""
        ...

    def post_counter(self, exclude_boards: Sequence[str] = ()) -> int:
        """Return the number of posts outside ``exclude_boards``."""
        ...
