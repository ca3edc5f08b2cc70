from .chat import ChatResource
from .classrooms import ClassroomResource
from .posts import PostResource
from .profile import ProfileResource, ProfileWithActivity
from .search import SearchResource
from .uploads import UploadResource

__all__ = [
    "ChatResource",
    "ClassroomResource",
    "PostResource",
    "ProfileResource",
    "ProfileWithActivity",
    "SearchResource",
    "UploadResource",
]
