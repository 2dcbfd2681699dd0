"""One-time import of the flat-file JSON board index into the database.

Older installs kept ``boards/index.json`` plus one ``<board_id>.json``
document per board. On every open we check the ``legacy_json_migrated``
setting; until it is ``"1"`` we try to copy that layout into the tables.
The copy is a single transaction, and the flag is written in the same
transaction, so a failed run leaves nothing behind and is retried on the
next open.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boardstore.core.config import ACTIVE_BOARD_KEY, LEGACY_MIGRATED_KEY
from boardstore.core.exceptions import MalformedInputError, StorageError
from boardstore.core.index import resolve_active_board_id
from boardstore.db import queries
from boardstore.db.models import BOARD_ITEM, FOLDER_ITEM
from boardstore.db.session import get_board_data_path, get_index_path
from boardstore.schemas.board import Board, BoardEntry, BoardsIndex

logger = logging.getLogger(__name__)

MIGRATED = "1"


class LegacyBoardsIndex(BaseModel):
    """The oldest shape: a flat list of boards, no folders."""

    boards: List[Board]
    active_board_id: Optional[str] = None


def load_legacy_index(index_path: Path) -> BoardsIndex:
    """Parse ``index.json`` in either known shape. A missing file is an empty index."""
    if not index_path.exists():
        return BoardsIndex()

    try:
        value = json.loads(index_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise StorageError(f"Could not read legacy index {index_path}: {e}") from e
    except ValueError as e:
        raise MalformedInputError(
            f"Legacy index is not valid JSON: {e}", path=str(index_path)
        ) from e

    if not isinstance(value, dict):
        raise MalformedInputError("Legacy index must be a JSON object", path=str(index_path))

    try:
        if "items" in value:
            return BoardsIndex.model_validate(value)
        if "boards" in value:
            legacy = LegacyBoardsIndex.model_validate(value)
            return BoardsIndex(
                items=[BoardEntry(**board.model_dump()) for board in legacy.boards],
                active_board_id=legacy.active_board_id,
            )
    except ValidationError as e:
        raise MalformedInputError(
            f"Legacy index has an unexpected shape: {e}", path=str(index_path)
        ) from e

    return BoardsIndex()


def _read_legacy_document(boards_dir: Path, board_id: str) -> str:
    board_path = get_board_data_path(boards_dir, board_id)
    if not board_path.exists():
        return queries.default_board_data()
    try:
        return board_path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Could not read legacy board {board_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedInputError(
            f"Legacy board is not valid UTF-8: {e}", path=str(board_path)
        ) from e


def _insert_board_if_needed(
    db: Session, boards_dir: Path, inserted: Set[str], board: Board
) -> None:
    if board.id in inserted:
        return
    data = _read_legacy_document(boards_dir, board.id)
    queries.insert_board(db, board, data, ignore_existing=True)
    inserted.add(board.id)


def migrate_legacy_json_if_needed(db: Session, boards_dir: Path) -> bool:
    """Run the legacy import unless already flagged. Returns True if boards were copied."""
    try:
        with db.begin():
            if queries.get_setting(db, LEGACY_MIGRATED_KEY) == MIGRATED:
                return False

            index_path = get_index_path(boards_dir)
            if not index_path.exists():
                queries.set_setting(db, LEGACY_MIGRATED_KEY, MIGRATED)
                return False

            if queries.any_board_exists(db):
                logger.info("Store already has boards; marking legacy index as migrated")
                queries.set_setting(db, LEGACY_MIGRATED_KEY, MIGRATED)
                return False

            index = load_legacy_index(index_path)
            inserted: Set[str] = set()

            for position, item in enumerate(index.items):
                if item.type == "board":
                    _insert_board_if_needed(db, boards_dir, inserted, item)
                    queries.insert_index_entry(db, position, BOARD_ITEM, item.id)
                    continue

                queries.insert_folder(db, item.id, item.name)
                queries.insert_index_entry(db, position, FOLDER_ITEM, item.id)
                for folder_position, board in enumerate(item.items):
                    _insert_board_if_needed(db, boards_dir, inserted, board)
                    queries.insert_folder_member(db, item.id, board.id, folder_position)

            active_id = resolve_active_board_id(index.items, index.active_board_id)
            queries.set_setting(db, ACTIVE_BOARD_KEY, active_id)
            queries.set_setting(db, LEGACY_MIGRATED_KEY, MIGRATED)
    except SQLAlchemyError as e:
        logger.error(f"Legacy index migration failed: {e}", exc_info=True)
        raise StorageError(f"Legacy index migration failed: {e}") from e

    logger.info(f"Migrated {len(inserted)} boards from legacy index at {index_path}")
    return True
