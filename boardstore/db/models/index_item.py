from sqlalchemy import Column, Integer, String
from boardstore.db.base import Base

BOARD_ITEM = "board"
FOLDER_ITEM = "folder"


class IndexItem(Base):
    """One slot of the top-level board list. ``item_id`` points at a board or a folder."""

    __tablename__ = "index_items"

    position = Column(Integer, primary_key=True, autoincrement=False)
    item_type = Column(String, nullable=False)  # "board" or "folder"
    item_id = Column(String, nullable=False)
