# openclass/services/post_service.py
from typing import List, Optional, Tuple
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import not_found_error
from ..models.classroom import Classroom
from ..models.post import Post
from ..models.user import User
from ..schemas.post import Post as PostSchema, PostCreate

logger = logging.getLogger(__name__)


class PostService(BaseService[Post]):
    resource_name = "Post"

    def __init__(self, db: AsyncSession):
        super().__init__(Post, db)

    async def list_posts(
        self,
        page: int = 1,
        limit: int = 20,
        classroom_id: Optional[str] = None,
        type: Optional[str] = None
    ) -> Tuple[List[PostSchema], int]:
        result = await self.get_paginated(page=page, limit=limit, classroom_id=classroom_id, type=type)
        return [PostSchema.model_validate(p) for p in result["items"]], result["total"]

    async def get_post(self, post_id: str) -> PostSchema:
        return PostSchema.model_validate(await self.get_or_404(post_id))

    async def create_post(self, author: User, data: PostCreate) -> PostSchema:
        if data.classroom_id and await self.db.get(Classroom, data.classroom_id) is None:
            raise not_found_error("Classroom", data.classroom_id)

        post = await self.create({
            "title": data.title,
            "content": data.content,
            "author_id": author.id,
            "classroom_id": data.classroom_id,
            "type": data.type,
            "file_url": data.file_url,
            "file_name": data.file_name,
            "file_size": data.file_size,
            "tags": data.tags,
        })
        logger.info(f"Post created: {post.id} by {author.id}")
        return PostSchema.model_validate(post)
