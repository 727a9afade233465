"""Post view schemas returned to clients."""

from pydantic import BaseModel, ConfigDict


class ImageView(BaseModel):
    """Image attached to a post, as shown to the viewer."""

    src: str
    file_type: int
    thumb_type: int
    spoiler: bool = False
    name: str | None = None
    size: int | None = None

    model_config = ConfigDict(frozen=True)


class ModerationEntryView(BaseModel):
    """Moderation action visible to moderators."""

    type: int
    by: str
    reason: str | None = None
    time: int

    model_config = ConfigDict(frozen=True)


class PostView(BaseModel):
    """Redacted post.

    There is no address field, so a view can never carry one.
    ``op`` is omitted for the opening post of a thread.
    """

    id: int
    op: int | None = None
    time: int
    body: str
    name: str | None = None
    trip: str | None = None
    image: ImageView | None = None
    deleted: bool = False
    img_deleted: bool = False
    mod: list[ModerationEntryView] | None = None
    mnemonic: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")
