# openclass/client/resources/chat.py
from typing import Any, Dict, Optional

from .base import Resource
from ..invalidation import MutationKind


class ChatResource(Resource):
    async def messages(
        self,
        classroom_id: Optional[str],
        limit: Optional[int] = None,
        before: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Recent messages, always revalidated"""
        params = {"limit": limit, "before": before}
        return await self.queries.fetch_query(
            ("messages", classroom_id, params),
            lambda: self.api.get(f"/chat/messages/{classroom_id}", params=params),
            stale_time=0,
            enabled=bool(classroom_id),
        )

    async def unread_count(self, classroom_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return await self.queries.fetch_query(
            ("unread", classroom_id),
            lambda: self.api.get(f"/chat/classrooms/{classroom_id}/unread-count"),
            enabled=bool(classroom_id),
        )

    async def send(self, classroom_id: str, content: str, reply_to_id: Optional[str] = None, **extra) -> Dict[str, Any]:
        payload = {"classroomId": classroom_id, "content": content, "replyToId": reply_to_id, **extra}
        return await self.mutations.run(
            MutationKind.SEND_MESSAGE,
            lambda: self.api.post("/chat/messages", json=payload),
            error_message="Failed to send message",
            classroom_id=classroom_id,
        )

    async def edit(self, classroom_id: str, message_id: str, content: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.EDIT_MESSAGE,
            lambda: self.api.put(f"/chat/messages/{message_id}", json={"content": content}),
            error_message="Failed to edit message",
            classroom_id=classroom_id,
        )

    async def delete(self, classroom_id: str, message_id: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.DELETE_MESSAGE,
            lambda: self.api.delete(f"/chat/messages/{message_id}"),
            success_message="Message deleted",
            error_message="Failed to delete message",
            classroom_id=classroom_id,
        )

    async def react(self, classroom_id: str, message_id: str, emoji: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.TOGGLE_REACTION,
            lambda: self.api.post(f"/chat/messages/{message_id}/reaction", json={"emoji": emoji}),
            error_message="Failed to update reaction",
            classroom_id=classroom_id,
        )

    async def mark_read(self, classroom_id: str, message_id: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.MARK_READ,
            lambda: self.api.post(f"/chat/messages/{message_id}/read"),
            error_message="Failed to mark message as read",
            classroom_id=classroom_id,
        )
