# tests/test_access.py
"""Tests for the access decision functions."""

from board_reader.core.settings import Settings
from board_reader.services.access import (
    SEE_MODERATION,
    AccessPolicy,
    Ident,
    can_access_board,
    can_access_thread,
    has_capability,
    restricted_boards_for,
    thread_board,
    thread_exists,
)
from board_reader.store import MemoryStore, PostRecord, ThreadRecord


def _store_with_threads() -> MemoryStore:
    store = MemoryStore()
    store.add_thread(ThreadRecord(id=1, board="a"))
    store.add_post(PostRecord(id=1, op=1))
    store.add_thread(ThreadRecord(id=2, board="staff"))
    store.add_post(PostRecord(id=2, op=2))
    store.add_thread(ThreadRecord(id=3, board="a", deleted=True))
    store.add_post(PostRecord(id=3, op=3))
    return store


def test_has_capability() -> None:
    ident = Ident.build(capabilities=["seeMnemonics"])
    assert has_capability("seeMnemonics", ident) is True
    assert has_capability(SEE_MODERATION, ident) is False
    assert has_capability(SEE_MODERATION, Ident.anonymous()) is False


def test_unrestricted_board_is_open_to_everyone(policy, anon) -> None:
    assert can_access_board("a", anon, policy) is True


def test_restricted_board_needs_capability_or_membership(policy, anon) -> None:
    assert can_access_board("staff", anon, policy) is False
    assert can_access_board("staff", Ident.build(capabilities=["accessStaff"]), policy) is True
    assert can_access_board("staff", Ident.build(boards=["staff"]), policy) is True
    # Membership of another board does not open the staff board.
    assert can_access_board("staff", Ident.build(boards=["a"]), policy) is False


def test_restricted_boards_for(policy, anon, moderator) -> None:
    assert restricted_boards_for(anon, policy) == ("staff",)
    assert restricted_boards_for(moderator, policy) == ()


def test_policy_from_settings() -> None:
    settings = Settings(SECRET_KEY="x", STAFF_BOARD="mods", STAFF_CAPABILITY="seeMods")
    policy = AccessPolicy.from_settings(settings)
    assert dict(policy.restricted_boards) == {"mods": "seeMods"}


def test_thread_exists_checks_board() -> None:
    store = _store_with_threads()
    assert thread_exists(store, 1, "a") is True
    assert thread_exists(store, 1, "b") is False
    assert thread_exists(store, 99, "a") is False
    assert thread_board(store, 2) == "staff"
    assert thread_board(store, 99) is None


def test_can_access_thread(policy, anon, moderator) -> None:
    store = _store_with_threads()
    assert can_access_thread(store, 1, "a", anon, policy) is True
    # Requested through the wrong board
    assert can_access_thread(store, 1, "b", anon, policy) is False
    assert can_access_thread(store, 2, "staff", anon, policy) is False
    assert can_access_thread(store, 2, "staff", moderator, policy) is True


def test_deleted_thread_needs_moderation(policy, anon, moderator) -> None:
    store = _store_with_threads()
    assert can_access_thread(store, 3, "a", anon, policy) is False
    assert can_access_thread(store, 3, "a", moderator, policy) is True


def test_access_checks_fail_closed_on_storage_error(policy, moderator) -> None:
    store = _store_with_threads()
    store.failing.add("thread_facts")
    assert thread_exists(store, 1, "a") is False
    assert can_access_thread(store, 1, "a", moderator, policy) is False
    assert thread_board(store, 1) is None
