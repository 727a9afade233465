"""Pydantic schemas for the board reader views."""

from .post import ImageView, ModerationEntryView, PostView
from .thread import Board, ThreadContainer, ThreadMeta

__all__ = [
    "Board",
    "ImageView",
    "ModerationEntryView",
    "PostView",
    "ThreadContainer",
    "ThreadMeta",
]
