from typing import Optional
from pydantic import BaseModel


class SystemStats(BaseModel):
    boards: int
    folders: int
    index_items: int
    active_board_id: Optional[str] = None


class BoardsDirectory(BaseModel):
    path: str
