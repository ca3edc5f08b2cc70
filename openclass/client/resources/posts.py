# openclass/client/resources/posts.py
from typing import Any, Dict, List, Optional

from .base import Resource
from ..invalidation import MutationKind


class PostResource(Resource):
    async def list(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        classroom_id: Optional[str] = None,
        type: Optional[str] = None
    ) -> Dict[str, Any]:
        params = {"page": page, "limit": limit, "classroomId": classroom_id, "type": type}
        return await self.queries.fetch_query(
            ("posts", params),
            lambda: self.api.get("/posts", params=params),
        )

    async def get(self, post_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return await self.queries.fetch_query(
            ("post", post_id),
            lambda: self.api.get(f"/posts/{post_id}"),
            enabled=bool(post_id),
        )

    async def create(
        self,
        title: str,
        content: Optional[str] = None,
        classroom_id: Optional[str] = None,
        type: str = "document",
        tags: Optional[List[str]] = None,
        **extra
    ) -> Dict[str, Any]:
        payload = {
            "title": title,
            "content": content,
            "classroomId": classroom_id,
            "type": type,
            "tags": tags or [],
            **extra,
        }
        return await self.mutations.run(
            MutationKind.CREATE_POST,
            lambda: self.api.post("/posts", json=payload),
            success_message="Post created",
            error_message="Failed to create post",
        )

    async def like(self, post_id: str) -> Dict[str, Any]:
        """Toggle the caller's like on a post"""
        return await self.mutations.run(
            MutationKind.LIKE_POST,
            lambda: self.api.post(f"/posts/{post_id}/like"),
            error_message="Failed to update like",
            post_id=post_id,
        )
