# src/board_reader/models/thread.py
"""SQLAlchemy model for thread metadata."""

from sqlalchemy import BigInteger, Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column

from board_reader.db.session import Base


class Thread(Base):
    """Metadata of a thread; the thread shares its id with its opening post.

    Reply and image counters are not stored here. They are derived from the
    post table whenever a thread is read.
    """

    __tablename__ = "thread"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    board: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    subject: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Unix seconds of creation and of the last bumping reply.
    time: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    bump_time: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
