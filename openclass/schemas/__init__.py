# openclass/schemas/__init__.py
"""Data shapes shared between the API and the client layer."""
from .common import ApiResponse, PaginatedResponse, PaginationInfo, ErrorResponse, ErrorDetail
from .user import User, UserSummary, UserProfile, ProfileStats, UserActivity, UpdateProfileRequest
from .classroom import Classroom, ClassroomCreate, ClassroomMembership
from .post import Post, PostCreate, LikeToggleResult
from .message import Message, MessageCreate, MessageUpdate, ReactionRequest, ReactionToggleResult, UnreadCount
from .file import File, UploadedFile
from .search import SearchResult, SearchResponse
