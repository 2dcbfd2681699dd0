from boardstore.db.models.board import Board, BoardData
from boardstore.db.models.folder import Folder, FolderItem
from boardstore.db.models.index_item import IndexItem, BOARD_ITEM, FOLDER_ITEM
from boardstore.db.models.setting import Setting

__all__ = [
    "Board",
    "BoardData",
    "Folder",
    "FolderItem",
    "IndexItem",
    "Setting",
    "BOARD_ITEM",
    "FOLDER_ITEM",
]
