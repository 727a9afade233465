"""Access decisions for the read path.

Every function here is a side-effect free predicate over a viewer identity,
an injected policy and, where needed, the ownership facts of a thread. No
function fetches full records.

Invariants:
    - Decisions fail closed: a storage error while deciding means "no access"
    - Board restrictions come from the injected AccessPolicy, never from
      module state
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from board_reader.core.errors import StorageError
from board_reader.core.settings import Settings
from board_reader.store.base import ReadStore, ThreadFacts

logger = logging.getLogger(__name__)

# Capability names
SEE_MODERATION = "seeModeration"
SEE_MNEMONICS = "seeMnemonics"


@dataclass(frozen=True)
class Ident:
    """Viewer identity and the capabilities granted to it.

    Attributes:
        user_id: Opaque account identifier, ``None`` for anonymous viewers
        capabilities: Named permissions such as ``seeModeration``
        boards: Boards the viewer is a member of
    """

    user_id: str | None = None
    capabilities: frozenset[str] = frozenset()
    boards: frozenset[str] = frozenset()

    @classmethod
    def anonymous(cls) -> Ident:
        return cls()

    @classmethod
    def build(
        cls,
        user_id: str | None = None,
        capabilities: Iterable[str] = (),
        boards: Iterable[str] = (),
    ) -> Ident:
        """Build an identity from arbitrary iterables of names."""
        return cls(
            user_id=user_id,
            capabilities=frozenset(capabilities),
            boards=frozenset(boards),
        )


@dataclass(frozen=True)
class AccessPolicy:
    """Board restrictions: each restricted board maps to the capability
    that opens it. Membership of the board opens it as well.
    """

    restricted_boards: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "restricted_boards", MappingProxyType(dict(self.restricted_boards))
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> AccessPolicy:
        return cls(restricted_boards=settings.restricted_boards)


def has_capability(name: str, ident: Ident) -> bool:
    """Return whether the viewer holds the named capability."""
    return name in ident.capabilities


def can_access_board(board: str, ident: Ident, policy: AccessPolicy) -> bool:
    """Return whether the viewer may read the given board."""
    required = policy.restricted_boards.get(board)
    if required is None:
        return True
    return board in ident.boards or has_capability(required, ident)


def restricted_boards_for(ident: Ident, policy: AccessPolicy) -> tuple[str, ...]:
    """Return the restricted boards the viewer may not read, sorted."""
    return tuple(
        sorted(
            board for board in policy.restricted_boards
            if not can_access_board(board, ident, policy)
        )
    )


def _thread_facts(store: ReadStore, thread_id: int) -> ThreadFacts | None:
    try:
        return store.thread_facts(thread_id)
    except StorageError as exc:
        logger.warning("Access check for thread %s failed closed: %s", thread_id, exc)
        return None


def thread_exists(store: ReadStore, thread_id: int, board: str) -> bool:
    """Return whether the thread exists on the given board."""
    facts = _thread_facts(store, thread_id)
    return facts is not None and facts.board == board


def can_access_thread(
    store: ReadStore,
    thread_id: int,
    board: str,
    ident: Ident,
    policy: AccessPolicy,
) -> bool:
    """Return whether the viewer may read the thread through the given board.

    Board access is checked against the board the thread actually lives on.
    Deleted threads are reachable only with moderation visibility.
    """
    facts = _thread_facts(store, thread_id)
    if facts is None or facts.board != board:
        return False
    if not can_access_board(facts.board, ident, policy):
        logger.debug("Thread %s hidden: board /%s/ is restricted", thread_id, facts.board)
        return False
    if facts.deleted and not has_capability(SEE_MODERATION, ident):
        return False
    return True


def thread_board(store: ReadStore, thread_id: int) -> str | None:
    """Return the board a thread lives on, or ``None`` if unknown."""
    facts = _thread_facts(store, thread_id)
    return facts.board if facts is not None else None
