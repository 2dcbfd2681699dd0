import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boardstore.core.config import ACTIVE_BOARD_KEY
from boardstore.core.exceptions import BoardNotFoundError, StorageError
from boardstore.core.index import first_board_id, resolve_active_board_id
from boardstore.core.legacy_migration import migrate_legacy_json_if_needed
from boardstore.db import queries
from boardstore.db.models import BOARD_ITEM, FOLDER_ITEM, Board, BoardData, FolderItem, IndexItem
from boardstore.db.session import get_boards_dir, make_session
from boardstore.schemas import board as schemas

logger = logging.getLogger(__name__)


class BoardStore:
    """Transactional operations over one board store.

    Each public method runs as exactly one transaction on ``db``; on any
    error the transaction is rolled back and the store is left as it was.
    Driver errors surface as ``StorageError``.
    """

    def __init__(self, db: Session, boards_dir: Path):
        self.db = db
        self.boards_dir = boards_dir

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            with self.db.begin():
                yield self.db
        except SQLAlchemyError as e:
            logger.error(f"Storage operation failed: {e}", exc_info=True)
            raise StorageError(str(e)) from e

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BoardStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- Index --- #

    def get_boards(self) -> schemas.BoardsIndex:
        with self.transaction() as db:
            return self._normalized_index(db)

    def read_boards_index(self) -> schemas.BoardsIndex:
        """The stored index as is, without repairing the active id."""
        with self.transaction() as db:
            return queries.load_boards_index(db)

    def set_boards_index(self, items: Sequence[schemas.BoardListItem]) -> schemas.BoardsIndex:
        """Replace the whole ordering and folder membership with ``items``.

        Folders without members are not written. Positions are renumbered
        from zero, so the stored order is contiguous whatever was skipped.
        """
        with self.transaction() as db:
            queries.clear_index(db)
            position = 0
            for item in items:
                if item.type == "board":
                    queries.insert_index_entry(db, position, BOARD_ITEM, item.id)
                    position += 1
                    continue
                if not item.items:
                    logger.info(f"Dropping empty folder {item.id} from board index")
                    continue
                queries.insert_folder(db, item.id, item.name)
                queries.insert_index_entry(db, position, FOLDER_ITEM, item.id)
                position += 1
                for folder_position, board in enumerate(item.items):
                    queries.insert_folder_member(db, item.id, board.id, folder_position)

            index = queries.load_boards_index(db)
            index.active_board_id = resolve_active_board_id(index.items, index.active_board_id)
            queries.set_setting(db, ACTIVE_BOARD_KEY, index.active_board_id)

        logger.info(f"Rewrote board index with {position} top-level entries")
        return index

    def _normalized_index(self, db: Session) -> schemas.BoardsIndex:
        index = queries.load_boards_index(db)
        next_active = resolve_active_board_id(index.items, index.active_board_id)
        if next_active != index.active_board_id:
            queries.set_setting(db, ACTIVE_BOARD_KEY, next_active)
            index.active_board_id = next_active
        return index

    # --- Boards --- #

    def create_board(self, name: str) -> schemas.Board:
        now = datetime.now(timezone.utc)
        board = schemas.Board(
            id=str(uuid.uuid4()),
            name=name,
            created_at=now,
            updated_at=now,
        )
        with self.transaction() as db:
            queries.insert_board(db, board, queries.default_board_data())
            queries.append_index_entry(db, BOARD_ITEM, board.id)
            queries.set_setting(db, ACTIVE_BOARD_KEY, board.id)

        logger.info(f"Created board {board.id} ({board.name!r})")
        return _as_stored(board)

    def rename_board(self, board_id: str, new_name: str) -> schemas.Board:
        with self.transaction() as db:
            self._touch(db, board_id, name=new_name)
            return queries.get_board_by_id(db, board_id)

    def delete_board(self, board_id: str) -> None:
        with self.transaction() as db:
            db.execute(delete(BoardData).where(BoardData.board_id == board_id))
            result = db.execute(delete(Board).where(Board.id == board_id))
            if result.rowcount == 0:
                raise BoardNotFoundError(board_id)

            db.execute(
                delete(IndexItem).where(
                    IndexItem.item_type == BOARD_ITEM, IndexItem.item_id == board_id
                )
            )
            db.execute(delete(FolderItem).where(FolderItem.board_id == board_id))
            queries.prune_empty_folders(db)

            if queries.get_setting(db, ACTIVE_BOARD_KEY) == board_id:
                next_id = first_board_id(queries.load_boards_index(db).items)
                queries.set_setting(db, ACTIVE_BOARD_KEY, next_id)

        logger.info(f"Deleted board {board_id}")

    def set_active_board(self, board_id: str) -> None:
        with self.transaction() as db:
            if not queries.board_id_exists(db, board_id):
                raise BoardNotFoundError(board_id)
            queries.set_setting(db, ACTIVE_BOARD_KEY, board_id)

    def set_collaboration_link(self, board_id: str, link: Optional[str]) -> None:
        with self.transaction() as db:
            self._touch(db, board_id, collaboration_link=link)

    def set_thumbnail(self, board_id: str, thumbnail: Optional[str]) -> None:
        with self.transaction() as db:
            self._touch(db, board_id, thumbnail=thumbnail)

    def duplicate_board(self, board_id: str, new_name: str) -> schemas.Board:
        """Clone a board and its document. The copy is appended at the top level."""
        now = datetime.now(timezone.utc)
        with self.transaction() as db:
            original = queries.get_board_by_id(db, board_id)
            data = queries.load_board_data_value(db, board_id)
            copy = schemas.Board(
                id=str(uuid.uuid4()),
                name=new_name,
                created_at=now,
                updated_at=now,
                thumbnail=original.thumbnail,
            )
            if data is None:
                data = queries.default_board_data()
            queries.insert_board(db, copy, data)
            queries.append_index_entry(db, BOARD_ITEM, copy.id)

        logger.info(f"Duplicated board {board_id} as {copy.id}")
        return _as_stored(copy)

    def list_board_names(self) -> List[Tuple[str, str]]:
        """(id, name) for every stored board, reachable or not."""
        with self.transaction() as db:
            return [(row.id, row.name) for row in db.execute(select(Board.id, Board.name))]

    # --- Documents --- #

    def save_board_data(self, board_id: str, data: str) -> None:
        with self.transaction() as db:
            self._touch(db, board_id)
            queries.upsert_board_data(db, board_id, data)

    def load_board_data(self, board_id: str) -> str:
        with self.transaction() as db:
            data = queries.load_board_data_value(db, board_id)
            if data is not None:
                return data
            if not queries.board_id_exists(db, board_id):
                raise BoardNotFoundError(board_id)
            return queries.default_board_data()

    # --- Settings --- #

    def get_active_board_id(self) -> Optional[str]:
        with self.transaction() as db:
            return queries.get_setting(db, ACTIVE_BOARD_KEY)

    def restore_active_board_id(self, board_id: Optional[str]) -> None:
        """Write the active id back verbatim; reads re-normalize it."""
        with self.transaction() as db:
            queries.set_setting(db, ACTIVE_BOARD_KEY, board_id)

    def _touch(self, db: Session, board_id: str, **values) -> None:
        result = db.execute(
            update(Board)
            .where(Board.id == board_id)
            .values(updated_at=queries.now_millis(), **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise BoardNotFoundError(board_id)


def _as_stored(board: schemas.Board) -> schemas.Board:
    # Round-trip through the stored representation so callers see what a
    # later read returns (millisecond precision).
    return board.model_copy(
        update={
            "created_at": queries.from_millis(queries.to_millis(board.created_at)),
            "updated_at": queries.from_millis(queries.to_millis(board.updated_at)),
        }
    )


@contextmanager
def open_store(data_dir: Optional[Path] = None) -> Iterator[BoardStore]:
    """Open the store under ``data_dir``, running the legacy import if it is still due."""
    try:
        boards_dir = get_boards_dir(data_dir)
        db = make_session(boards_dir)
    except (OSError, SQLAlchemyError) as e:
        raise StorageError(f"Could not open board store: {e}") from e

    store = BoardStore(db, boards_dir)
    try:
        migrate_legacy_json_if_needed(db, boards_dir)
        yield store
    finally:
        store.close()


def get_store():
    with open_store() as store:
        yield store
