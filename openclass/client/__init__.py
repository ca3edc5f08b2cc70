# openclass/client/__init__.py
"""Client-side data access: HTTP calls, cached reads and cache-refreshing writes."""
from typing import Optional

from .http import ApiClient, ApiError
from .invalidation import INVALIDATION_RULES, MutationKind, invalidation_keys
from .mutations import MutationRunner
from .notifications import Notification, Notifier
from .query_cache import QueryClient, normalize_key
from .resources import (
    ChatResource, ClassroomResource, PostResource, ProfileResource, SearchResource, UploadResource,
)
from .ui_store import UIStore


class OpenClassClient:
    """Bundles the resources over one API client and one query cache."""

    def __init__(
        self,
        api: ApiClient,
        queries: Optional[QueryClient] = None,
        notifier: Optional[Notifier] = None,
        ui: Optional[UIStore] = None
    ):
        self.api = api
        self.queries = queries or QueryClient()
        self.notifier = notifier or Notifier()
        self.ui = ui or UIStore()
        self.mutations = MutationRunner(self.queries, self.notifier)

        resource_args = (self.api, self.queries, self.mutations)
        self.classrooms = ClassroomResource(*resource_args)
        self.posts = PostResource(*resource_args)
        self.profile = ProfileResource(*resource_args)
        self.search = SearchResource(*resource_args)
        self.uploads = UploadResource(*resource_args)
        self.chat = ChatResource(*resource_args)

    async def __aenter__(self) -> "OpenClassClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self.api.aclose()


__all__ = [
    "ApiClient",
    "ApiError",
    "INVALIDATION_RULES",
    "MutationKind",
    "MutationRunner",
    "Notification",
    "Notifier",
    "OpenClassClient",
    "QueryClient",
    "UIStore",
    "invalidation_keys",
    "normalize_key",
]
