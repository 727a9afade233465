# src/board_reader/models/__init__.py
"""SQLAlchemy models for the board reader."""

from .post import ModerationEntry, Post
from .thread import Thread

__all__ = ["ModerationEntry", "Post", "Thread"]
