"""Thread and board view schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .post import PostView


class ThreadMeta(BaseModel):
    """Thread metadata with derived counters."""

    id: int
    board: str
    subject: str | None = None
    time: int
    bump_time: int
    deleted: bool = False
    post_ctr: int = Field(..., description="Number of replies, excluding the OP")
    image_ctr: int = Field(..., description="Number of replies carrying an image")

    model_config = ConfigDict(frozen=True)


class ThreadContainer(BaseModel):
    """A thread as served to a viewer: OP, metadata and replies.

    ``posts`` is keyed by the stringified post id and keeps reply creation
    order. Board listings always leave it empty. ``post`` is ``None`` when
    the OP is hidden from the viewer.
    """

    post: PostView | None = None
    thread: ThreadMeta
    posts: dict[str, PostView] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Board(BaseModel):
    """Catalog view of a board, or of every board the viewer can reach."""

    ctr: int = Field(0, description="Number of posts made on the listed boards")
    threads: list[ThreadContainer] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
