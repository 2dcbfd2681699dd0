import logging

from fastapi import APIRouter, Depends, status

from boardstore.core.boards import BoardStore, get_store
from boardstore.schemas.board import (
    ActiveBoardUpdate,
    Board,
    BoardCreate,
    BoardDataRead,
    BoardDataSave,
    BoardDuplicate,
    BoardRename,
    BoardsIndex,
    BoardsIndexUpdate,
    CollaborationLinkUpdate,
    ThumbnailUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/boards", tags=["boards"])


@router.get("/", response_model=BoardsIndex)
def get_boards(store: BoardStore = Depends(get_store)):
    """Ordered boards and folders plus the resolved active board."""
    return store.get_boards()


@router.post("/", response_model=Board, status_code=status.HTTP_201_CREATED)
def create_board(board: BoardCreate, store: BoardStore = Depends(get_store)):
    return store.create_board(board.name)


@router.put("/index", response_model=BoardsIndex)
def set_boards_index(update: BoardsIndexUpdate, store: BoardStore = Depends(get_store)):
    """Overwrite the full ordering, folders included."""
    return store.set_boards_index(update.items)


@router.put("/active", status_code=status.HTTP_204_NO_CONTENT)
def set_active_board(update: ActiveBoardUpdate, store: BoardStore = Depends(get_store)):
    store.set_active_board(update.board_id)


@router.patch("/{board_id}", response_model=Board)
def rename_board(board_id: str, data: BoardRename, store: BoardStore = Depends(get_store)):
    return store.rename_board(board_id, data.name)


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_board(board_id: str, store: BoardStore = Depends(get_store)):
    """Delete a board along with its document and folder membership."""
    store.delete_board(board_id)


@router.get("/{board_id}/data", response_model=BoardDataRead)
def load_board_data(board_id: str, store: BoardStore = Depends(get_store)):
    return {"board_id": board_id, "data": store.load_board_data(board_id)}


@router.put("/{board_id}/data", status_code=status.HTTP_204_NO_CONTENT)
def save_board_data(board_id: str, body: BoardDataSave, store: BoardStore = Depends(get_store)):
    store.save_board_data(board_id, body.data)


@router.put("/{board_id}/collaboration-link", status_code=status.HTTP_204_NO_CONTENT)
def set_collaboration_link(
    board_id: str,
    body: CollaborationLinkUpdate,
    store: BoardStore = Depends(get_store),
):
    store.set_collaboration_link(board_id, body.link)


@router.put("/{board_id}/thumbnail", status_code=status.HTTP_204_NO_CONTENT)
def set_thumbnail(
    board_id: str,
    body: ThumbnailUpdate,
    store: BoardStore = Depends(get_store),
):
    store.set_thumbnail(board_id, body.thumbnail)


@router.post("/{board_id}/duplicate", response_model=Board, status_code=status.HTTP_201_CREATED)
def duplicate_board(board_id: str, body: BoardDuplicate, store: BoardStore = Depends(get_store)):
    """Copy a board and its document; the copy goes to the end of the top level."""
    return store.duplicate_board(board_id, body.name)
