"""Unit tests for the ORM models defined in board_reader.models.

These tests verify basic mapping correctness: table names, the indexes the
read queries rely on, and that the moderation history is a mapped
relationship that follows its post.
"""

from sqlalchemy.orm import attributes

from board_reader.models import ModerationEntry, Post, Thread


def test_table_names():
    """Model classes expose expected __tablename__ values."""
    assert Thread.__tablename__ == "thread"
    assert Post.__tablename__ == "post"
    assert ModerationEntry.__tablename__ == "moderation_entry"


def test_read_path_indexes():
    """Posts are looked up by thread and threads by board."""
    assert Post.__table__.c.op.index is True
    assert Thread.__table__.c.board.index is True
    assert ModerationEntry.__table__.c.post_id.index is True


def test_ids_are_not_generated():
    """Post and thread ids are assigned by the write path."""
    assert Post.__table__.c.id.autoincrement is False
    assert Thread.__table__.c.id.autoincrement is False


def test_moderation_relationship_is_instrumented():
    assert isinstance(Post.moderation, attributes.InstrumentedAttribute)


def test_moderation_entries_load_in_order(db_session, make_thread, make_post):
    """Moderation entries come back in the order they were recorded."""
    make_thread(1)
    make_post(
        2,
        1,
        mod=[
            {"type": 0, "by": "first", "time": 1},
            {"type": 1, "by": "second", "time": 2},
        ],
    )
    db_session.expire_all()

    post = db_session.get(Post, 2)
    assert [entry.by for entry in post.moderation] == ["first", "second"]
