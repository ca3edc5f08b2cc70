# openclass/schemas/user.py
"""Pydantic schemas for users and profiles."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field

from .common import CamelModel

UserRole = Literal["student", "instructor", "admin"]


class UserSummary(CamelModel):
    id: str
    name: str
    avatar_url: Optional[str] = None


class User(UserSummary):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = "student"
    is_active: bool = True
    is_verified: bool = False
    is_online: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileStats(CamelModel):
    posts_count: int = 0
    files_count: int = 0
    likes_given: int = 0
    likes_received: int = 0
    classrooms_owned: int = 0
    classrooms_joined: int = 0
    classrooms_liked: int = 0
    messages_count: int = 0


class UserProfile(CamelModel):
    id: str
    email: Optional[str] = None
    name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole = "student"
    is_active: bool = True
    is_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    stats: ProfileStats = Field(default_factory=ProfileStats)


class ClassroomRef(CamelModel):
    id: str
    name: str


class ActivityPost(CamelModel):
    id: str
    title: str
    content: Optional[str] = None
    type: str
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    likes_count: int = 0
    views_count: int = 0
    created_at: datetime
    classroom: Optional[ClassroomRef] = None


class LikedPost(ActivityPost):
    liked_at: datetime
    author: UserSummary


class LikedClassroom(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    level: str
    likes_count: int = 0
    member_count: int = 0
    posts_count: int = 0
    liked_at: datetime
    owner: UserSummary


class ActivityFile(CamelModel):
    id: str
    title: str
    file_name: str
    original_name: str
    type: str
    size: int
    url: str
    views_count: int = 0
    created_at: datetime


class UserActivity(CamelModel):
    posts: List[ActivityPost] = Field(default_factory=list)
    liked_posts: List[LikedPost] = Field(default_factory=list)
    liked_classrooms: List[LikedClassroom] = Field(default_factory=list)
    uploaded_files: List[ActivityFile] = Field(default_factory=list)


class UpdateProfileRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar_url: Optional[str] = Field(default=None, max_length=500)
