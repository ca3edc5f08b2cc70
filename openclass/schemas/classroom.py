# openclass/schemas/classroom.py
"""Pydantic schemas for classrooms."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import Field, field_validator

from .common import CamelModel
from .user import UserSummary

ClassroomLevel = Literal["beginner", "intermediate", "advanced"]


class ClassroomCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    category: str = Field(..., min_length=1, max_length=100)
    level: ClassroomLevel = "beginner"
    is_public: bool = True
    allow_chat: bool = True

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        # Older clients send BEGINNER / INTERMEDIATE / ADVANCED
        return v.lower() if isinstance(v, str) else v


class Classroom(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    level: ClassroomLevel
    owner_id: str
    owner: Optional[UserSummary] = None
    is_public: bool = True
    allow_chat: bool = True
    likes_count: int = 0
    member_count: int = 0
    created_at: datetime
    updated_at: datetime


class ClassroomMembership(CamelModel):
    classroom_id: str
    user_id: str
    role: str
    joined: bool
