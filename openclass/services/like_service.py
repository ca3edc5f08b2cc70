# openclass/services/like_service.py
"""Toggle likes on posts and classrooms.

A like is a (user, target) row guarded by a unique constraint; liking a
target the user already likes removes the row instead. The denormalised
``likes_count`` is moved in the same transaction.
"""
import logging

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import conflict_error, not_found_error
from ..models.classroom import Classroom, ClassroomLike
from ..models.post import Post, Like
from ..schemas.post import LikeToggleResult

logger = logging.getLogger(__name__)


class LikeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _toggle(self, target_model, like_model, target_field: str, user_id: str, target_id: str) -> LikeToggleResult:
        if await self.db.get(target_model, target_id) is None:
            raise not_found_error(target_model.__name__, target_id)

        target_column = getattr(like_model, target_field)
        stmt = select(like_model).where(like_model.user_id == user_id, target_column == target_id)
        existing = (await self.db.execute(stmt)).scalar_one_or_none()

        if existing is not None:
            result = await self.db.execute(
                delete(like_model).where(like_model.user_id == user_id, target_column == target_id)
            )
            # Only the request that actually removed the row moves the count
            delta, liked = -result.rowcount, False
        else:
            self.db.add(like_model(user_id=user_id, **{target_field: target_id}))
            delta, liked = 1, True

        if delta:
            await self.db.execute(
                update(target_model)
                .where(target_model.id == target_id)
                .values(likes_count=target_model.likes_count + delta)
            )
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent request from the same user won the insert
            await self.db.rollback()
            raise conflict_error("Like already recorded")

        likes_count = (await self.db.execute(
            select(target_model.likes_count).where(target_model.id == target_id)
        )).scalar_one()

        action = "liked" if liked else "unliked"
        logger.info(f"User {user_id} {action} {target_model.__name__.lower()} {target_id}")
        return LikeToggleResult(liked=liked, likes_count=max(likes_count, 0))

    async def toggle_post_like(self, user_id: str, post_id: str) -> LikeToggleResult:
        return await self._toggle(Post, Like, "post_id", user_id, post_id)

    async def toggle_classroom_like(self, user_id: str, classroom_id: str) -> LikeToggleResult:
        return await self._toggle(Classroom, ClassroomLike, "classroom_id", user_id, classroom_id)
