"""Statement-level helpers shared by the board store and the legacy importer.

None of these open or commit a transaction; callers run them inside
``session.begin()``.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy import delete, exists, func, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import Session

from boardstore.core.config import ACTIVE_BOARD_KEY
from boardstore.core.exceptions import BoardNotFoundError
from boardstore.db.models import (
    BOARD_ITEM,
    FOLDER_ITEM,
    Board,
    BoardData,
    Folder,
    FolderItem,
    IndexItem,
    Setting,
)
from boardstore.schemas import board as schemas

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def dump_document(value) -> str:
    """Serialize a document compactly, keeping non-ASCII text as is."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


DEFAULT_BOARD_DATA = dump_document({"excalidraw": None, "excalidraw-state": None})


def default_board_data() -> str:
    return DEFAULT_BOARD_DATA


def to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)


def from_millis(value: int) -> datetime:
    return EPOCH + timedelta(milliseconds=value)


def now_millis() -> int:
    return to_millis(datetime.now(timezone.utc))


def board_from_row(row) -> schemas.Board:
    return schemas.Board(
        id=row.id,
        name=row.name,
        created_at=from_millis(row.created_at),
        updated_at=from_millis(row.updated_at),
        collaboration_link=row.collaboration_link,
        thumbnail=row.thumbnail,
    )


# --- Settings --- #


def get_setting(db: Session, key: str) -> Optional[str]:
    return db.execute(select(Setting.value).where(Setting.key == key)).scalar_one_or_none()


def set_setting(db: Session, key: str, value: Optional[str]) -> None:
    """Upsert ``key``; ``None`` removes it."""
    if value is None:
        db.execute(delete(Setting).where(Setting.key == key))
        return
    stmt = insert(Setting).values(key=key, value=value)
    db.execute(
        stmt.on_conflict_do_update(index_elements=[Setting.key], set_={"value": value})
    )


# --- Boards and documents --- #


def board_id_exists(db: Session, board_id: str) -> bool:
    return bool(db.execute(select(exists().where(Board.id == board_id))).scalar())


def any_board_exists(db: Session) -> bool:
    return bool(db.execute(select(exists().where(Board.id.isnot(None)))).scalar())


def get_board_by_id(db: Session, board_id: str) -> schemas.Board:
    row = db.execute(
        select(Board.__table__).where(Board.id == board_id)
    ).one_or_none()
    if row is None:
        raise BoardNotFoundError(board_id)
    return board_from_row(row)


def insert_board(
    db: Session, board: schemas.Board, data: str, ignore_existing: bool = False
) -> None:
    stmt = insert(Board).values(
        id=board.id,
        name=board.name,
        created_at=to_millis(board.created_at),
        updated_at=to_millis(board.updated_at),
        collaboration_link=board.collaboration_link,
        thumbnail=board.thumbnail,
    )
    if ignore_existing:
        stmt = stmt.on_conflict_do_nothing(index_elements=[Board.id])
    db.execute(stmt)
    upsert_board_data(db, board.id, data)


def upsert_board_data(db: Session, board_id: str, data: str) -> None:
    stmt = insert(BoardData).values(board_id=board_id, data=data)
    db.execute(
        stmt.on_conflict_do_update(index_elements=[BoardData.board_id], set_={"data": data})
    )


def load_board_data_value(db: Session, board_id: str) -> Optional[str]:
    return db.execute(
        select(BoardData.data).where(BoardData.board_id == board_id)
    ).scalar_one_or_none()


# --- Ordering --- #


def next_index_position(db: Session) -> int:
    return db.execute(select(func.coalesce(func.max(IndexItem.position), -1) + 1)).scalar()


def append_index_entry(db: Session, item_type: str, item_id: str) -> int:
    position = next_index_position(db)
    insert_index_entry(db, position, item_type, item_id)
    return position


def insert_index_entry(db: Session, position: int, item_type: str, item_id: str) -> None:
    db.execute(
        insert(IndexItem).values(position=position, item_type=item_type, item_id=item_id)
    )


def insert_folder_member(db: Session, folder_id: str, board_id: str, position: int) -> None:
    db.execute(
        insert(FolderItem).values(folder_id=folder_id, board_id=board_id, position=position)
    )


def insert_folder(db: Session, folder_id: str, name: str) -> None:
    stmt = insert(Folder).values(id=folder_id, name=name)
    db.execute(stmt.on_conflict_do_update(index_elements=[Folder.id], set_={"name": name}))


def clear_index(db: Session) -> None:
    db.execute(delete(IndexItem))
    db.execute(delete(FolderItem))
    db.execute(delete(Folder))


def prune_empty_folders(db: Session) -> None:
    """Drop folders without members, then index entries pointing at missing folders."""
    db.execute(delete(Folder).where(Folder.id.not_in(select(FolderItem.folder_id).distinct())))
    db.execute(
        delete(IndexItem).where(
            IndexItem.item_type == FOLDER_ITEM,
            IndexItem.item_id.not_in(select(Folder.id)),
        )
    )


def load_boards_index(db: Session) -> schemas.BoardsIndex:
    """Rebuild the ordered list from storage; active id is returned as stored."""
    boards: Dict[str, schemas.Board] = {
        row.id: board_from_row(row) for row in db.execute(select(Board.__table__))
    }
    folder_names = dict(db.execute(select(Folder.id, Folder.name)).all())

    members: Dict[str, List[schemas.Board]] = {}
    for folder_id, board_id in db.execute(
        select(FolderItem.folder_id, FolderItem.board_id).order_by(
            FolderItem.folder_id, FolderItem.position
        )
    ):
        if board_id in boards:
            members.setdefault(folder_id, []).append(boards[board_id])

    items = []
    for item_type, item_id in db.execute(
        select(IndexItem.item_type, IndexItem.item_id).order_by(IndexItem.position)
    ):
        if item_type == BOARD_ITEM:
            if item_id in boards:
                items.append(schemas.BoardEntry(**boards[item_id].model_dump()))
        elif item_type == FOLDER_ITEM:
            if item_id in folder_names and members.get(item_id):
                items.append(
                    schemas.BoardFolder(
                        id=item_id, name=folder_names[item_id], items=members[item_id]
                    )
                )

    return schemas.BoardsIndex(
        items=items, active_board_id=get_setting(db, ACTIVE_BOARD_KEY)
    )
