"""initial read schema

Revision ID: 1f3c9a2b7d10
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "1f3c9a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the thread, post and moderation_entry tables."""
    op.create_table(
        "thread",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("board", sa.Text(), nullable=False),
        sa.Column("subject", sa.Text(), nullable=True),
        sa.Column("time", sa.BigInteger(), nullable=False),
        sa.Column("bump_time", sa.BigInteger(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_thread_board", "thread", ["board"])

    op.create_table(
        "post",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("op", sa.BigInteger(), nullable=False),
        sa.Column("time", sa.BigInteger(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("trip", sa.Text(), nullable=True),
        sa.Column("ip", sa.Text(), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("img_deleted", sa.Boolean(), nullable=False),
        sa.Column("image_src", sa.Text(), nullable=True),
        sa.Column("image_file_type", sa.SmallInteger(), nullable=True),
        sa.Column("image_thumb_type", sa.SmallInteger(), nullable=True),
        sa.Column("image_spoiler", sa.Boolean(), nullable=False),
        sa.Column("image_name", sa.Text(), nullable=True),
        sa.Column("image_size", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["op"], ["thread.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_op", "post", ["op"])

    op.create_table(
        "moderation_entry",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.SmallInteger(), nullable=False),
        sa.Column("by", sa.Text(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("time", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_moderation_entry_post_id", "moderation_entry", ["post_id"])


def downgrade() -> None:
    """Drop the read schema."""
    op.drop_index("ix_moderation_entry_post_id", table_name="moderation_entry")
    op.drop_table("moderation_entry")
    op.drop_index("ix_post_op", table_name="post")
    op.drop_table("post")
    op.drop_index("ix_thread_board", table_name="thread")
    op.drop_table("thread")
