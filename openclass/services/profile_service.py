# openclass/services/profile_service.py
from typing import Dict
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from .classroom_service import ClassroomService
from ..models.classroom import Classroom, ClassroomLike, ClassroomMembership
from ..models.file import File
from ..models.message import Message
from ..models.post import Post, Like
from ..models.user import User
from ..schemas.user import (
    ActivityFile, ActivityPost, LikedClassroom, LikedPost,
    ProfileStats, UpdateProfileRequest, UserActivity, UserProfile, UserSummary,
)

logger = logging.getLogger(__name__)

ACTIVITY_LIMIT = 50


class ProfileService(BaseService[User]):
    resource_name = "User"

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_stats(self, user_id: str) -> ProfileStats:
        await self.get_or_404(user_id)
        likes_received = (await self.db.execute(
            select(func.count()).select_from(Like).join(Post, Like.post_id == Post.id).where(Post.author_id == user_id)
        )).scalar() or 0

        async def count(model, column) -> int:
            stmt = select(func.count()).select_from(model).where(column == user_id)
            return (await self.db.execute(stmt)).scalar() or 0

        return ProfileStats(
            posts_count=await count(Post, Post.author_id),
            files_count=await count(File, File.uploaded_by_id),
            likes_given=await count(Like, Like.user_id),
            likes_received=likes_received,
            classrooms_owned=await count(Classroom, Classroom.owner_id),
            classrooms_joined=await count(ClassroomMembership, ClassroomMembership.user_id),
            classrooms_liked=await count(ClassroomLike, ClassroomLike.user_id),
            messages_count=await count(Message, Message.author_id),
        )

    async def get_profile(self, user_id: str, include_private: bool = True) -> UserProfile:
        user = await self.get_or_404(user_id)
        profile = UserProfile(
            id=user.id,
            email=user.email if include_private else None,
            name=user.name,
            avatar_url=user.avatar_url,
            bio=user.bio,
            role=user.role,
            is_active=user.is_active,
            is_verified=user.is_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
            stats=await self.get_stats(user_id),
        )
        logger.info(f"Profile loaded: {user_id}")
        return profile

    async def update_profile(self, user_id: str, data: UpdateProfileRequest) -> UserProfile:
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)
        await self.update(user_id, changes)
        logger.info(f"Profile updated: {user_id} ({', '.join(sorted(changes)) or 'no fields'})")
        return await self.get_profile(user_id)

    async def get_activity(self, user_id: str) -> UserActivity:
        await self.get_or_404(user_id)

        posts = (await self.db.execute(
            select(Post).where(Post.author_id == user_id)
            .order_by(Post.created_at.desc()).limit(ACTIVITY_LIMIT)
        )).scalars().all()

        post_likes = (await self.db.execute(
            select(Like).where(Like.user_id == user_id)
            .order_by(Like.created_at.desc()).limit(ACTIVITY_LIMIT)
        )).scalars().all()

        classroom_likes = (await self.db.execute(
            select(ClassroomLike).where(ClassroomLike.user_id == user_id)
            .order_by(ClassroomLike.created_at.desc()).limit(ACTIVITY_LIMIT)
        )).scalars().all()

        files = (await self.db.execute(
            select(File).where(File.uploaded_by_id == user_id)
            .order_by(File.created_at.desc()).limit(ACTIVITY_LIMIT)
        )).scalars().all()

        liked_classroom_ids = [like.classroom_id for like in classroom_likes]
        member_counts = await ClassroomService(self.db).member_counts(liked_classroom_ids)
        post_counts = await self._post_counts(liked_classroom_ids)

        return UserActivity(
            posts=[ActivityPost.model_validate(post) for post in posts],
            liked_posts=[
                LikedPost(
                    **ActivityPost.model_validate(like.post).model_dump(),
                    liked_at=like.created_at,
                    author=UserSummary.model_validate(like.post.author),
                )
                for like in post_likes
            ],
            liked_classrooms=[
                LikedClassroom(
                    id=like.classroom.id,
                    name=like.classroom.name,
                    description=like.classroom.description,
                    category=like.classroom.category,
                    level=like.classroom.level,
                    likes_count=like.classroom.likes_count,
                    member_count=member_counts.get(like.classroom_id, 0),
                    posts_count=post_counts.get(like.classroom_id, 0),
                    liked_at=like.created_at,
                    owner=UserSummary.model_validate(like.classroom.owner),
                )
                for like in classroom_likes
            ],
            uploaded_files=[ActivityFile.model_validate(f) for f in files],
        )

    async def _post_counts(self, classroom_ids) -> Dict[str, int]:
        if not classroom_ids:
            return {}
        stmt = (
            select(Post.classroom_id, func.count())
            .where(Post.classroom_id.in_(classroom_ids))
            .group_by(Post.classroom_id)
        )
        return {classroom_id: n for classroom_id, n in (await self.db.execute(stmt)).all()}
