from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field


class Board(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    collaboration_link: Optional[str] = None
    thumbnail: Optional[str] = None


class BoardEntry(Board):
    """A board placed directly in the top-level list."""

    type: Literal["board"] = "board"


class BoardFolder(BaseModel):
    type: Literal["folder"] = "folder"
    id: str
    name: str
    items: List[Board] = []


BoardListItem = Annotated[Union[BoardEntry, BoardFolder], Field(discriminator="type")]


class BoardsIndex(BaseModel):
    items: List[BoardListItem] = []
    active_board_id: Optional[str] = None


class BoardCreate(BaseModel):
    name: str


class BoardRename(BaseModel):
    name: str


class BoardDuplicate(BaseModel):
    name: str


class ActiveBoardUpdate(BaseModel):
    board_id: str


class BoardDataSave(BaseModel):
    data: str


class BoardDataRead(BaseModel):
    board_id: str
    data: str


class CollaborationLinkUpdate(BaseModel):
    link: Optional[str] = None


class ThumbnailUpdate(BaseModel):
    thumbnail: Optional[str] = None


class BoardsIndexUpdate(BaseModel):
    items: List[BoardListItem]
