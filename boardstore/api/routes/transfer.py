from fastapi import APIRouter, Depends

from boardstore.core.boards import BoardStore, get_store
from boardstore.core.transfer import export_boards, import_boards
from boardstore.schemas.transfer import (
    BoardsExportRequest,
    BoardsImportRequest,
    BoardsImportResult,
)

router = APIRouter(prefix="/api/transfer", tags=["transfer"])


@router.post("/export", response_model=dict)
def export_boards_to_file(body: BoardsExportRequest, store: BoardStore = Depends(get_store)):
    """Write all boards to ``file_path`` as a versioned export file."""
    export_file = export_boards(store, body.file_path)
    return {"file_path": body.file_path, "boards": len(export_file.boards)}


@router.post("/import", response_model=BoardsImportResult)
def import_boards_from_file(body: BoardsImportRequest, store: BoardStore = Depends(get_store)):
    """Import the chosen entries (by position) from an export file."""
    return import_boards(store, body.file_path, body.selected_indices)
