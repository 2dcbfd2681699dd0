"""Persistence layer for whiteboard boards: ordered index, folders, documents."""

from boardstore.core.boards import BoardStore, open_store
from boardstore.core.exceptions import (
    BoardNotFoundError,
    BoardStoreError,
    MalformedInputError,
    StorageError,
)
from boardstore.core.transfer import export_boards, import_boards

__version__ = "1.0.0"

__all__ = [
    "BoardStore",
    "open_store",
    "export_boards",
    "import_boards",
    "BoardStoreError",
    "BoardNotFoundError",
    "StorageError",
    "MalformedInputError",
]
