# openclass/services/chat_service.py
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy import select, delete, func, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from .classroom_service import ClassroomService
from ..core.exceptions import authorization_error, not_found_error, validation_error
from ..models.base import utcnow
from ..models.classroom import Classroom
from ..models.message import Message, MessageRead, MessageReaction
from ..models.user import User
from ..schemas.message import (
    Message as MessageSchema, MessageCreate, MessageUpdate, ReactionToggleResult, UnreadCount,
)

logger = logging.getLogger(__name__)

MAX_HISTORY = 100


class ChatService(BaseService[Message]):
    resource_name = "Message"

    def __init__(self, db: AsyncSession):
        super().__init__(Message, db)
        self.classrooms = ClassroomService(db)

    async def _require_member(self, user_id: str, classroom_id: str) -> Classroom:
        classroom = await self.classrooms.get_or_404(classroom_id)
        if not await self.classrooms.is_member(user_id, classroom_id):
            raise authorization_error("You are not a member of this classroom")
        return classroom

    async def _get_live_message(self, message_id: str) -> Message:
        message = await self.get_or_404(message_id)
        if message.is_deleted:
            raise not_found_error("Message", message_id)
        return message

    async def create_message(self, author: User, data: MessageCreate) -> MessageSchema:
        """Send a message in a classroom"""
        classroom = await self._require_member(author.id, data.classroom_id)
        if not classroom.allow_chat:
            raise authorization_error("Chat is disabled in this classroom")

        if data.reply_to_id:
            parent = await self.get(data.reply_to_id)
            if parent is None or parent.classroom_id != data.classroom_id:
                raise validation_error(
                    "Reply target must be a message in the same classroom",
                    details=[{"field": "replyToId", "message": "unknown message for this classroom"}],
                )

        message = await self.create({
            "content": data.content,
            "author_id": author.id,
            "classroom_id": data.classroom_id,
            "type": data.type,
            "file_url": data.file_url,
            "file_name": data.file_name,
            "file_size": data.file_size,
            "reply_to_id": data.reply_to_id,
        })
        logger.info(f"Message created: {message.id} in {data.classroom_id} by {author.id}")
        return MessageSchema.model_validate(message)

    async def get_messages(
        self,
        user: User,
        classroom_id: str,
        limit: int = 50,
        before: Optional[str] = None
    ) -> List[MessageSchema]:
        """Most recent messages before a timestamp, oldest first"""
        await self._require_member(user.id, classroom_id)

        stmt = select(Message).where(
            Message.classroom_id == classroom_id,
            Message.is_deleted == False
        )
        if before:
            try:
                cutoff = datetime.fromisoformat(before.replace("Z", "+00:00"))
            except ValueError:
                raise validation_error(
                    "Invalid 'before' timestamp",
                    details=[{"field": "before", "message": "expected an ISO 8601 timestamp"}],
                )
            stmt = stmt.where(Message.created_at < cutoff)

        stmt = stmt.order_by(Message.created_at.desc(), Message.id.desc()).limit(min(limit, MAX_HISTORY))
        result = await self.db.execute(stmt)
        return [MessageSchema.model_validate(m) for m in reversed(result.scalars().all())]

    async def update_message(self, user: User, message_id: str, data: MessageUpdate) -> MessageSchema:
        message = await self._get_live_message(message_id)
        if message.author_id != user.id:
            raise authorization_error("Only the author can edit this message")

        updated = await self.update(message_id, {
            "content": data.content,
            "is_edited": True,
            "edited_at": utcnow(),
        })
        return MessageSchema.model_validate(updated)

    async def delete_message(self, user: User, message_id: str) -> MessageSchema:
        """Soft delete; the row stays so replies keep their target"""
        message = await self._get_live_message(message_id)
        if message.author_id != user.id:
            raise authorization_error("Only the author can delete this message")

        deleted = await self.update(message_id, {"is_deleted": True, "deleted_at": utcnow()})
        logger.info(f"Message deleted: {message_id}")
        return MessageSchema.model_validate(deleted)

    async def mark_read(self, user: User, message_id: str) -> Message:
        message = await self._get_live_message(message_id)
        await self._require_member(user.id, message.classroom_id)

        stmt = select(MessageRead).where(MessageRead.user_id == user.id, MessageRead.message_id == message_id)
        if (await self.db.execute(stmt)).scalar_one_or_none() is None:
            self.db.add(MessageRead(user_id=user.id, message_id=message_id))
            try:
                await self.db.commit()
            except IntegrityError:
                # Already marked by a concurrent request
                await self.db.rollback()
        return message

    async def toggle_reaction(self, user: User, message_id: str, emoji: str) -> ReactionToggleResult:
        message = await self._get_live_message(message_id)
        await self._require_member(user.id, message.classroom_id)

        conditions = and_(
            MessageReaction.user_id == user.id,
            MessageReaction.message_id == message_id,
            MessageReaction.emoji == emoji,
        )
        existing = (await self.db.execute(select(MessageReaction).where(conditions))).scalar_one_or_none()
        if existing is not None:
            await self.db.execute(delete(MessageReaction).where(conditions))
            reacted = False
        else:
            self.db.add(MessageReaction(user_id=user.id, message_id=message_id, emoji=emoji))
            reacted = True
        await self.db.commit()
        return ReactionToggleResult(message_id=message_id, emoji=emoji, reacted=reacted)

    async def unread_count(self, user: User, classroom_id: str) -> UnreadCount:
        await self._require_member(user.id, classroom_id)

        read_ids = select(MessageRead.message_id).where(MessageRead.user_id == user.id)
        stmt = select(func.count()).select_from(Message).where(
            Message.classroom_id == classroom_id,
            Message.is_deleted == False,
            Message.author_id != user.id,
            Message.id.not_in(read_ids),
        )
        count = (await self.db.execute(stmt)).scalar() or 0
        return UnreadCount(classroom_id=classroom_id, unread_count=count)
