# openclass/schemas/post.py
"""Pydantic schemas for posts and likes."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field

from .common import CamelModel
from .user import ClassroomRef, UserSummary

PostType = Literal["document", "video", "image", "code"]


class PostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    classroom_id: Optional[str] = None
    type: PostType = "document"
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)


class Post(CamelModel):
    id: str
    title: str
    content: Optional[str] = None
    author_id: str
    author: Optional[UserSummary] = None
    classroom_id: Optional[str] = None
    classroom: Optional[ClassroomRef] = None
    type: PostType
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    likes_count: int = 0
    views_count: int = 0
    created_at: datetime
    updated_at: datetime


class LikeToggleResult(CamelModel):
    liked: bool
    likes_count: int
