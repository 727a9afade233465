# src/board_reader/api/v1/endpoints/boards.py
"""Board catalog endpoints."""

from fastapi import APIRouter

from board_reader.schemas import Board
from board_reader.services.reader import Reader

from ..dependencies import IdentDep, PolicyDep, StoreDep

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("/all", response_model=Board, response_model_exclude_none=True)
async def get_all_board(ident: IdentDep, store: StoreDep, policy: PolicyDep) -> Board:
    """List threads across every board the viewer can read."""
    return Reader(store, ident, policy=policy).get_all_board()


@router.get("/{board}", response_model=Board, response_model_exclude_none=True)
async def get_board(
    board: str,
    ident: IdentDep,
    store: StoreDep,
    policy: PolicyDep,
) -> Board:
    """List the threads of a board.

    Unknown and restricted boards both come back empty.
    """
    return Reader(store, ident, board=board, policy=policy).get_board()
