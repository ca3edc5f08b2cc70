# openclass/schemas/file.py
"""Pydantic schemas for uploaded files."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field

from .common import CamelModel

FileType = Literal["IMAGE", "VIDEO", "AUDIO", "DOCUMENT", "OTHER"]


class UploadedFile(CamelModel):
    url: str
    public_id: str
    original_name: str
    size: int
    format: str


class File(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    file_name: str
    original_name: str
    mime_type: Optional[str] = None
    size: int
    url: str
    public_id: str
    type: FileType
    category_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    uploaded_by_id: Optional[str] = None
    views_count: int = 0
    created_at: datetime
    updated_at: datetime
