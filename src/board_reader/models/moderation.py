# src/board_reader/models/moderation.py
"""Moderation action codes stored in ``moderation_entry.type``."""

MODERATION_DELETE_POST = 0
MODERATION_DELETE_IMAGE = 1
MODERATION_SPOILER_IMAGE = 2
MODERATION_BAN_POSTER = 3
