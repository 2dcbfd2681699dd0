from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field

EXPORT_VERSION = 1


class BoardsExportEntry(BaseModel):
    id: str = ""
    name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    collaboration_link: Optional[str] = None
    thumbnail: Optional[str] = None
    data: Optional[Any] = None  # parsed document, null when unparsable


class BoardsExportFile(BaseModel):
    version: int = EXPORT_VERSION
    exported_at: datetime = Field(alias="exportedAt")
    boards: List[BoardsExportEntry] = []

    class Config:
        populate_by_name = True


class BoardsExportRequest(BaseModel):
    file_path: str


class BoardsImportRequest(BaseModel):
    file_path: str
    selected_indices: List[int]


class BoardsImportResult(BaseModel):
    imported: int
    skipped: int
