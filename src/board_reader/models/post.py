# src/board_reader/models/post.py
"""SQLAlchemy models for posts and their moderation history."""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from board_reader.db.session import Base


class Post(Base):
    """A single post. The opening post of a thread has ``op == id``."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    op: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("thread.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    time: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    trip: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Poster address. Never leaves the read path.
    ip: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    img_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Image columns; a post has an image iff image_src is set.
    image_src: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_file_type: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    image_thumb_type: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    image_spoiler: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    image_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_size: Mapped[int | None] = mapped_column(Integer, nullable=True)

    moderation: Mapped[list[ModerationEntry]] = relationship(
        "ModerationEntry",
        order_by="ModerationEntry.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ModerationEntry(Base):
    """Audit record of a moderation action applied to a post."""

    __tablename__ = "moderation_entry"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # See board_reader.models.moderation for the action codes.
    type: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    by: Mapped[str] = mapped_column(Text, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    time: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
