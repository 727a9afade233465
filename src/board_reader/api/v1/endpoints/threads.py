# src/board_reader/api/v1/endpoints/threads.py
"""Thread endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from board_reader.core.settings import settings
from board_reader.schemas import ThreadContainer
from board_reader.services.reader import Reader

from ..dependencies import IdentDep, PolicyDep, StoreDep

router = APIRouter(prefix="/threads", tags=["threads"])


@router.get(
    "/{board}/{thread_id}",
    response_model=ThreadContainer,
    response_model_exclude_none=True,
)
async def get_thread(
    board: str,
    thread_id: int,
    ident: IdentDep,
    store: StoreDep,
    policy: PolicyDep,
    last: int | None = Query(
        None,
        ge=0,
        le=settings.max_last_n,
        description="Only return the last N posts, the OP included",
    ),
) -> ThreadContainer:
    """Get a thread with its replies.

    Args:
        board: Board the thread is requested through
        thread_id: ID of the thread
        ident: Viewer identity
        store: Read store
        policy: Board access policy
        last: Size of the trailing window, 0 for the whole thread

    Returns:
        The thread as visible to the viewer

    Raises:
        HTTPException: If the thread does not exist or is not visible
    """
    reader = Reader(store, ident, board=board, policy=policy)
    last_n = settings.default_last_n if last is None else last
    thread = reader.get_thread(thread_id, last_n)
    if thread is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Thread not found",
        )
    return thread
