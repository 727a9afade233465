"""Thread, post and board reads shaped for a single viewer.

A :class:`Reader` is built per request from a store, the viewer identity and
the board the request targets. It composes store queries, applies the access
rules of :mod:`board_reader.services.access` and redacts every post according
to the viewer's capabilities.

Invariants:
    - Missing and forbidden records both come back as ``None`` (or an empty
      board), so viewers cannot probe for hidden content
    - ``StorageError`` from data queries always propagates
    - No returned view carries a poster address
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from board_reader.core.errors import MnemonicError
from board_reader.core.settings import settings
from board_reader.schemas import (
    Board,
    ImageView,
    ModerationEntryView,
    PostView,
    ThreadContainer,
    ThreadMeta,
)
from board_reader.services.access import (
    SEE_MNEMONICS,
    SEE_MODERATION,
    AccessPolicy,
    Ident,
    can_access_board,
    can_access_thread,
    has_capability,
    restricted_boards_for,
    thread_board,
)
from board_reader.services.mnemonic import mnemonic
from board_reader.store.base import JoinedThread, PostRecord, ReadStore, ThreadRecord

logger = logging.getLogger(__name__)


def to_thread_meta(thread: ThreadRecord) -> ThreadMeta:
    """Convert a thread record into its client-side form."""
    return ThreadMeta(
        id=thread.id,
        board=thread.board,
        subject=thread.subject,
        time=thread.time,
        bump_time=thread.bump_time,
        deleted=thread.deleted,
        post_ctr=thread.post_ctr,
        image_ctr=thread.image_ctr,
    )


class Reader:
    """Reads threads, posts and boards on behalf of one viewer."""

    def __init__(
        self,
        store: ReadStore,
        ident: Ident,
        board: str = "",
        policy: AccessPolicy | None = None,
        mnemonic_salt: str | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            store: Store to read from.
            ident: Identity of the viewer.
            board: Board the request targets; unused by ``get_all_board``.
            policy: Board restrictions, read from settings when omitted.
            mnemonic_salt: Salt for poster mnemonics, read from settings
                when omitted.
        """
        self.store = store
        self.ident = ident
        self.board = board
        self.policy = policy if policy is not None else AccessPolicy.from_settings(settings)
        self.mnemonic_salt = (
            mnemonic_salt if mnemonic_salt is not None else settings.mnemonic_salt
        )
        self.can_see_moderation = has_capability(SEE_MODERATION, ident)
        self.can_see_mnemonics = has_capability(SEE_MNEMONICS, ident)

    def get_thread(self, thread_id: int, last_n: int = 0) -> ThreadContainer | None:
        """Return a thread with its OP and replies.

        Args:
            thread_id: Id of the thread (and of its OP).
            last_n: When non-zero, only the last ``last_n`` posts are
                returned, the OP taking one of the slots.

        Returns:
            The thread, or ``None`` if it does not exist on this board or the
            viewer may not see it. When only the OP is hidden from the
            viewer, the thread is still returned without ``post``.

        Raises:
            ValueError: If ``last_n`` is negative.
            StorageError: If the store fails while fetching data.
        """
        if last_n < 0:
            raise ValueError("last_n must not be negative")

        # Checks existence on this board too; fails closed.
        if not can_access_thread(self.store, thread_id, self.board, self.ident, self.policy):
            logger.debug("Thread %s unavailable on /%s/", thread_id, self.board)
            return None

        joined = self.store.get_joined_thread(thread_id)
        if joined is None:
            return None
        op = self.parse_post(joined.op)

        limit = last_n - 1 if last_n else None
        replies = self.store.get_replies(thread_id, limit)

        filtered: dict[str, PostView] = {}
        for reply in replies:
            parsed = self.parse_post(reply)
            if parsed is not None:
                filtered[str(parsed.id)] = parsed

        return ThreadContainer(
            post=op,
            thread=to_thread_meta(joined.thread),
            posts=filtered,
        )

    def get_post(self, post_id: int) -> PostView | None:
        """Return a single post, or ``None`` if missing or hidden."""
        record = self.store.get_post(post_id)
        if record is None:
            return None

        board = thread_board(self.store, record.op)
        if board is None or not can_access_thread(
            self.store, record.op, board, self.ident, self.policy
        ):
            logger.debug("Post %s unavailable: thread %s not accessible", post_id, record.op)
            return None
        return self.parse_post(record)

    def get_board(self, board: str | None = None) -> Board:
        """Return the catalog of a board.

        The board is empty when it does not exist or the viewer may not
        read it.
        """
        board = board if board is not None else self.board
        if not can_access_board(board, self.ident, self.policy):
            logger.debug("Board /%s/ hidden from viewer", board)
            return Board()

        threads = self.store.get_board_threads(board)
        return Board(
            ctr=self.store.board_counter(board),
            threads=self.parse_threads(threads),
        )

    def get_all_board(self) -> Board:
        """Return the catalog of every board the viewer can read.

        Restricted boards are left out of the store query itself.
        """
        excluded = restricted_boards_for(self.ident, self.policy)
        threads = self.store.get_all_threads(excluded)
        return Board(
            ctr=self.store.post_counter(excluded),
            threads=self.parse_threads(threads),
        )

    def parse_threads(self, threads: Iterable[JoinedThread]) -> list[ThreadContainer]:
        """Turn joined board query results into catalog entries.

        Deleted threads are dropped for viewers without moderation
        visibility, as are threads whose OP the viewer may not see. Replies
        are never included.
        """
        filtered: list[ThreadContainer] = []
        for joined in threads:
            if joined.thread.deleted and not self.can_see_moderation:
                continue
            op = self.parse_post(joined.op)
            if op is None:
                continue
            filtered.append(
                ThreadContainer(post=op, thread=to_thread_meta(joined.thread))
            )
        return filtered

    def parse_post(self, post: PostRecord) -> PostView | None:
        """Redact a post according to the viewer's capabilities.

        Returns ``None`` when the post must not be shown at all: it is
        deleted and the viewer lacks moderation visibility, or its mnemonic
        cannot be derived.
        """
        image = post.image
        img_deleted = post.img_deleted
        mod = post.mod
        if not self.can_see_moderation:
            if post.deleted:
                return None
            if img_deleted:
                image = None
                img_deleted = False
            mod = ()

        mnem = None
        if self.can_see_mnemonics:
            try:
                mnem = mnemonic(post.ip, self.mnemonic_salt)
            except MnemonicError as exc:
                logger.warning("Dropping post %s: %s", post.id, exc)
                return None

        return PostView(
            id=post.id,
            op=None if post.is_op else post.op,
            time=post.time,
            body=post.body,
            name=post.name,
            trip=post.trip,
            image=(
                ImageView(
                    src=image.src,
                    file_type=image.file_type,
                    thumb_type=image.thumb_type,
                    spoiler=image.spoiler,
                    name=image.name,
                    size=image.size,
                )
                if image is not None
                else None
            ),
            deleted=post.deleted,
            img_deleted=img_deleted,
            mod=[
                ModerationEntryView(
                    type=entry.type,
                    by=entry.by,
                    reason=entry.reason,
                    time=entry.time,
                )
                for entry in mod
            ] or None,
            mnemonic=mnem,
        )
