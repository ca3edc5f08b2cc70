# openclass/models/__init__.py
"""Import all models here so the metadata knows every table."""
from .base import Base

from .user import User
from .classroom import Category, Classroom, ClassroomMembership, ClassroomLike
from .post import Post, Like
from .message import Message, MessageRead, MessageReaction
from .file import File
