# openclass/services/classroom_service.py
from typing import Dict, List, Optional, Tuple
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import authorization_error, conflict_error, not_found_error
from ..models.classroom import Classroom, ClassroomMembership
from ..models.user import User
from ..schemas.classroom import Classroom as ClassroomSchema, ClassroomCreate, ClassroomMembership as MembershipSchema
from ..schemas.user import UserSummary

logger = logging.getLogger(__name__)


class ClassroomService(BaseService[Classroom]):
    resource_name = "Classroom"

    def __init__(self, db: AsyncSession):
        super().__init__(Classroom, db)

    async def member_counts(self, classroom_ids: List[str]) -> Dict[str, int]:
        if not classroom_ids:
            return {}
        stmt = (
            select(ClassroomMembership.classroom_id, func.count())
            .where(ClassroomMembership.classroom_id.in_(classroom_ids))
            .group_by(ClassroomMembership.classroom_id)
        )
        result = await self.db.execute(stmt)
        return {classroom_id: count for classroom_id, count in result.all()}

    def to_schema(self, classroom: Classroom, member_count: int = 0) -> ClassroomSchema:
        return ClassroomSchema(
            id=classroom.id,
            name=classroom.name,
            description=classroom.description,
            category=classroom.category,
            level=classroom.level,
            owner_id=classroom.owner_id,
            owner=UserSummary.model_validate(classroom.owner) if classroom.owner else None,
            is_public=classroom.is_public,
            allow_chat=classroom.allow_chat,
            likes_count=classroom.likes_count,
            member_count=member_count,
            created_at=classroom.created_at,
            updated_at=classroom.updated_at,
        )

    async def list_classrooms(
        self,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        level: Optional[str] = None
    ) -> Tuple[List[ClassroomSchema], int]:
        """Public classrooms, newest first"""
        result = await self.get_paginated(
            page=page,
            limit=limit,
            is_public=True,
            category=category,
            level=level.lower() if level else None,
        )
        classrooms = result["items"]
        counts = await self.member_counts([c.id for c in classrooms])
        return [self.to_schema(c, counts.get(c.id, 0)) for c in classrooms], result["total"]

    async def get_classroom(self, classroom_id: str) -> ClassroomSchema:
        classroom = await self.get_or_404(classroom_id)
        counts = await self.member_counts([classroom.id])
        return self.to_schema(classroom, counts.get(classroom.id, 0))

    async def get_membership(self, user_id: str, classroom_id: str) -> Optional[ClassroomMembership]:
        stmt = select(ClassroomMembership).where(
            ClassroomMembership.user_id == user_id,
            ClassroomMembership.classroom_id == classroom_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def is_member(self, user_id: str, classroom_id: str) -> bool:
        return await self.get_membership(user_id, classroom_id) is not None

    async def create_classroom(self, owner: User, data: ClassroomCreate) -> ClassroomSchema:
        """Create a classroom; the creator becomes its owner member"""
        classroom = Classroom(
            name=data.name,
            description=data.description,
            category=data.category,
            level=data.level,
            owner_id=owner.id,
            is_public=data.is_public,
            allow_chat=data.allow_chat,
        )
        self.db.add(classroom)
        await self.db.flush()
        self.db.add(ClassroomMembership(user_id=owner.id, classroom_id=classroom.id, role="owner"))
        await self.db.commit()

        logger.info(f"Classroom created: {classroom.id} by {owner.id}")
        return self.to_schema(await self.refetch(classroom.id), member_count=1)

    async def join(self, user: User, classroom_id: str) -> MembershipSchema:
        await self.get_or_404(classroom_id)
        if await self.is_member(user.id, classroom_id):
            raise conflict_error("Already a member of this classroom")

        self.db.add(ClassroomMembership(user_id=user.id, classroom_id=classroom_id, role="member"))
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise conflict_error("Already a member of this classroom")

        logger.info(f"User {user.id} joined classroom {classroom_id}")
        return MembershipSchema(classroom_id=classroom_id, user_id=user.id, role="member", joined=True)

    async def leave(self, user: User, classroom_id: str) -> MembershipSchema:
        classroom = await self.get_or_404(classroom_id)
        if classroom.owner_id == user.id:
            raise authorization_error("The owner cannot leave their own classroom")

        membership = await self.get_membership(user.id, classroom_id)
        if membership is None:
            raise not_found_error("Membership")

        await self.db.delete(membership)
        await self.db.commit()

        logger.info(f"User {user.id} left classroom {classroom_id}")
        return MembershipSchema(classroom_id=classroom_id, user_id=user.id, role="member", joined=False)
