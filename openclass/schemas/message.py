# openclass/schemas/message.py
"""Pydantic schemas for classroom chat."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field

from .common import CamelModel
from .user import UserSummary

MessageType = Literal["text", "file", "image", "system"]


class MessageCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    classroom_id: str
    type: MessageType = "text"
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    reply_to_id: Optional[str] = None


class MessageUpdate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)


class ReactionRequest(CamelModel):
    emoji: str = Field(..., min_length=1, max_length=32)


class ReplyPreview(CamelModel):
    id: str
    content: str
    author_id: str


class Reaction(CamelModel):
    user_id: str
    emoji: str


class Message(CamelModel):
    id: str
    content: str
    author_id: str
    author: Optional[UserSummary] = None
    classroom_id: str
    type: MessageType = "text"
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    is_deleted: bool = False
    reply_to_id: Optional[str] = None
    reply_to: Optional[ReplyPreview] = None
    reactions: List[Reaction] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ReactionToggleResult(CamelModel):
    message_id: str
    emoji: str
    reacted: bool


class UnreadCount(CamelModel):
    classroom_id: str
    unread_count: int
