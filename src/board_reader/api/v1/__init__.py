# src/board_reader/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import boards_router, posts_router, threads_router

__all__ = [
    "boards_router",
    "posts_router",
    "threads_router",
]
