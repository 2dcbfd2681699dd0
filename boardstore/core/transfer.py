"""Export the board set to a versioned JSON file and import a selection back.

Export file::

    {"version": 1, "exportedAt": "...", "boards": [
        {"id", "name", "created_at", "updated_at",
         "collaboration_link", "thumbnail", "data"}, ...]}

``data`` holds the parsed document, or null when the stored string is not
valid JSON. Import always creates fresh boards; ids from the file are only
used to detect that an entry is a copy of something already present.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Set

from pydantic import ValidationError

from boardstore.core.boards import BoardStore
from boardstore.core.exceptions import BoardStoreError, MalformedInputError
from boardstore.core.index import unique_boards
from boardstore.db import queries
from boardstore.schemas.transfer import (
    EXPORT_VERSION,
    BoardsExportEntry,
    BoardsExportFile,
    BoardsImportResult,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Imported board"


def _parse_document(data: str):
    try:
        return json.loads(data)
    except ValueError:
        return None


def export_boards(store: BoardStore, file_path: str) -> BoardsExportFile:
    """Write every reachable board, first occurrence per id, in list order."""
    index = store.read_boards_index()
    entries = []
    for board in unique_boards(index):
        entries.append(
            BoardsExportEntry(
                id=board.id,
                name=board.name,
                created_at=board.created_at,
                updated_at=board.updated_at,
                collaboration_link=board.collaboration_link,
                thumbnail=board.thumbnail,
                data=_parse_document(store.load_board_data(board.id)),
            )
        )

    export_file = BoardsExportFile(
        version=EXPORT_VERSION,
        exported_at=datetime.now(timezone.utc),
        boards=entries,
    )
    try:
        Path(file_path).write_text(
            export_file.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
        )
    except OSError as e:
        raise MalformedInputError(f"Could not write export file: {e}", path=file_path) from e

    logger.info(f"Exported {len(entries)} boards to {file_path}")
    return export_file


def load_export_file(file_path: str) -> BoardsExportFile:
    try:
        payload = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Could not read import file: {e}", path=file_path) from e
    try:
        return BoardsExportFile.model_validate_json(payload)
    except ValidationError as e:
        raise MalformedInputError(f"Invalid boards export file: {e}", path=file_path) from e


def make_copy_name(base: str, used_names: Set[str]) -> str:
    """First of "<base> (Copy)", "<base> (Copy 2)", ... not in ``used_names`` (lowercased)."""
    clean = base.strip() or PLACEHOLDER_NAME
    candidate = f"{clean} (Copy)"
    counter = 2
    while candidate.lower() in used_names:
        candidate = f"{clean} (Copy {counter})"
        counter += 1
    return candidate


def import_boards(
    store: BoardStore, file_path: str, selected_indices: Iterable[int]
) -> BoardsImportResult:
    """Create a new board for each selected entry of an export file.

    Selection is by position in the file's ``boards`` list. An entry whose
    board cannot be created is counted as skipped and the rest continue.
    The active board is the same after the import as before it.
    """
    export_file = load_export_file(file_path)
    selected = set(selected_indices)

    seen_ids: Set[str] = set()
    used_names: Set[str] = set()
    for board_id, name in store.list_board_names():
        seen_ids.add(board_id)
        name_key = name.strip().lower()
        if name_key:
            used_names.add(name_key)

    active_before: Optional[str] = store.get_active_board_id()
    imported = 0
    skipped = 0

    try:
        for position, entry in enumerate(export_file.boards):
            if position not in selected:
                continue

            base_name = entry.name.strip() or PLACEHOLDER_NAME
            has_id = bool(entry.id.strip())
            if has_id and entry.id in seen_ids:
                final_name = make_copy_name(base_name, used_names)
            else:
                final_name = base_name

            try:
                created = store.create_board(final_name)
            except BoardStoreError as e:
                logger.warning(f"Skipping import entry {position} ({final_name!r}): {e}")
                skipped += 1
                continue

            if entry.data is not None:
                store.save_board_data(created.id, queries.dump_document(entry.data))

            used_names.add(final_name.lower())
            if has_id:
                seen_ids.add(entry.id)
            imported += 1
    finally:
        store.restore_active_board_id(active_before)

    logger.info(f"Imported {imported} boards from {file_path} ({skipped} skipped)")
    return BoardsImportResult(imported=imported, skipped=skipped)
