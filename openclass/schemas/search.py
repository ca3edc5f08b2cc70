# openclass/schemas/search.py
"""Pydantic schemas for search."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field

from .common import CamelModel
from .user import UserSummary

SearchType = Literal["all", "posts", "classrooms"]


class SearchResult(CamelModel):
    id: str
    title: str
    content: Optional[str] = None
    type: Literal["POST", "FILE", "CLASSROOM"]
    author: UserSummary
    tags: List[str] = Field(default_factory=list)
    relevance_score: float
    url: str
    created_at: datetime
    updated_at: datetime


class SearchResponse(CamelModel):
    query: str
    type: SearchType = "all"
    results: List[SearchResult] = Field(default_factory=list)
    total: int = 0
