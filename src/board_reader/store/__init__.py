# src/board_reader/store/__init__.py
"""Read-side store backends."""

from .base import (
    ImageRecord,
    JoinedThread,
    ModerationEntryRecord,
    PostRecord,
    ReadStore,
    ThreadFacts,
    ThreadRecord,
)
from .memory import MemoryStore
from .sql import SqlStore

__all__ = [
    "ImageRecord",
    "JoinedThread",
    "MemoryStore",
    "ModerationEntryRecord",
    "PostRecord",
    "ReadStore",
    "SqlStore",
    "ThreadFacts",
    "ThreadRecord",
]
