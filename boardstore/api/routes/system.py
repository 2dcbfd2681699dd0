from fastapi import APIRouter, Depends
from sqlalchemy import func, select

from boardstore.core.boards import BoardStore, get_store
from boardstore.db.models import Board, Folder, IndexItem
from boardstore.schemas.system import BoardsDirectory, SystemStats

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/stats", response_model=SystemStats)
def get_stats(store: BoardStore = Depends(get_store)):
    """Return store-wide counts and the resolved active board."""
    active_board_id = store.get_boards().active_board_id
    with store.transaction() as db:
        return {
            "boards": db.execute(select(func.count()).select_from(Board)).scalar(),
            "folders": db.execute(select(func.count()).select_from(Folder)).scalar(),
            "index_items": db.execute(select(func.count()).select_from(IndexItem)).scalar(),
            "active_board_id": active_board_id,
        }


@router.get("/boards-dir", response_model=BoardsDirectory)
def get_boards_directory(store: BoardStore = Depends(get_store)):
    """Directory holding the database, for an "open containing folder" action."""
    return {"path": str(store.boards_dir)}
