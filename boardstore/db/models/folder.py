from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from boardstore.db.base import Base


class Folder(Base):
    __tablename__ = "folders"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)


class FolderItem(Base):
    __tablename__ = "folder_items"

    folder_id = Column(
        String, ForeignKey("folders.id", ondelete="CASCADE"), primary_key=True
    )
    position = Column(Integer, primary_key=True)
    board_id = Column(
        String, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("folder_id", "board_id", name="uq_folder_board"),
    )
