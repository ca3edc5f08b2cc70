# openclass/client/invalidation.py
"""Which cached reads each mutation makes stale.

Each rule is a tuple of key prefixes. A ``"{name}"`` item is filled from
the mutation's variables, so ``("post", "{post_id}")`` with ``post_id="p1"``
invalidates ``("post", "p1")``.
"""
from enum import Enum
from typing import Dict, List, Tuple


class MutationKind(str, Enum):
    CREATE_CLASSROOM = "create_classroom"
    JOIN_CLASSROOM = "join_classroom"
    LEAVE_CLASSROOM = "leave_classroom"
    TOGGLE_CLASSROOM_LIKE = "toggle_classroom_like"
    CREATE_POST = "create_post"
    LIKE_POST = "like_post"
    UPDATE_PROFILE = "update_profile"
    UPLOAD_FILE = "upload_file"
    UPLOAD_FILES = "upload_files"
    DELETE_FILE = "delete_file"
    SEND_MESSAGE = "send_message"
    EDIT_MESSAGE = "edit_message"
    DELETE_MESSAGE = "delete_message"
    TOGGLE_REACTION = "toggle_reaction"
    MARK_READ = "mark_read"


CLASSROOMS = ("classrooms",)
POSTS = ("posts",)
MY_PROFILE = ("profile", "me")
MY_ACTIVITY = ("profile", "me", "activity")
CLASSROOM_MESSAGES = ("messages", "{classroom_id}")
CLASSROOM_UNREAD = ("unread", "{classroom_id}")

INVALIDATION_RULES: Dict[MutationKind, Tuple[Tuple[str, ...], ...]] = {
    MutationKind.CREATE_CLASSROOM: (CLASSROOMS,),
    MutationKind.JOIN_CLASSROOM: (CLASSROOMS, MY_PROFILE),
    MutationKind.LEAVE_CLASSROOM: (CLASSROOMS, MY_PROFILE),
    MutationKind.TOGGLE_CLASSROOM_LIKE: (CLASSROOMS, MY_ACTIVITY),
    MutationKind.CREATE_POST: (POSTS, MY_PROFILE),
    MutationKind.LIKE_POST: (POSTS, ("post", "{post_id}"), MY_ACTIVITY),
    MutationKind.UPDATE_PROFILE: (MY_PROFILE,),
    MutationKind.UPLOAD_FILE: (MY_ACTIVITY,),
    MutationKind.UPLOAD_FILES: (MY_ACTIVITY,),
    MutationKind.DELETE_FILE: (MY_ACTIVITY,),
    MutationKind.SEND_MESSAGE: (CLASSROOM_MESSAGES,),
    MutationKind.EDIT_MESSAGE: (CLASSROOM_MESSAGES,),
    MutationKind.DELETE_MESSAGE: (CLASSROOM_MESSAGES,),
    MutationKind.TOGGLE_REACTION: (CLASSROOM_MESSAGES,),
    MutationKind.MARK_READ: (CLASSROOM_UNREAD,),
}


def _placeholder(item: str):
    if item.startswith("{") and item.endswith("}"):
        return item[1:-1]
    return None


def invalidation_keys(kind: MutationKind, **variables) -> List[Tuple[str, ...]]:
    """Resolve the rule for ``kind``; raises KeyError for a missing variable."""
    keys = []
    for template in INVALIDATION_RULES[kind]:
        key = []
        for item in template:
            name = _placeholder(item)
            if name is None:
                key.append(item)
            elif variables.get(name) is None:
                raise KeyError(f"{kind.value} invalidation needs '{name}'")
            else:
                key.append(variables[name])
        keys.append(tuple(key))
    return keys
