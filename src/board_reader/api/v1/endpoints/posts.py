# src/board_reader/api/v1/endpoints/posts.py
"""Post endpoints."""

from fastapi import APIRouter, HTTPException, status

from board_reader.schemas import PostView
from board_reader.services.reader import Reader

from ..dependencies import IdentDep, PolicyDep, StoreDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/{post_id}", response_model=PostView, response_model_exclude_none=True)
async def get_post(
    post_id: int,
    ident: IdentDep,
    store: StoreDep,
    policy: PolicyDep,
) -> PostView:
    """Get a specific post by ID.

    Raises:
        HTTPException: If the post is missing, deleted or not visible
    """
    post = Reader(store, ident, policy=policy).get_post(post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post
