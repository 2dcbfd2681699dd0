from sqlalchemy import Column, BigInteger, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from boardstore.db.base import Base


class Board(Base):
    __tablename__ = "boards"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(BigInteger, nullable=False)  # epoch millis
    updated_at = Column(BigInteger, nullable=False)
    collaboration_link = Column(String, nullable=True)
    thumbnail = Column(Text, nullable=True)
    document = relationship(
        "BoardData", back_populates="board", uselist=False, passive_deletes=True
    )


class BoardData(Base):
    __tablename__ = "board_data"

    board_id = Column(
        String, ForeignKey("boards.id", ondelete="CASCADE"), primary_key=True
    )
    data = Column(Text, nullable=False)

    board = relationship("Board", back_populates="document")
