# openclass/routers/chat.py
"""Classroom chat endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.database import get_db
from ..core.rate_limiter import check_rate_limit
from ..models.user import User
from ..schemas.message import MessageCreate, MessageUpdate, ReactionRequest
from ..services.chat_service import ChatService, MAX_HISTORY
from ..utils.responses import error_responses, success_response

router = APIRouter(prefix="/api/chat", tags=["Chat"], responses=error_responses(400, 401, 403, 404, 429))


@router.post("/messages", status_code=status.HTTP_201_CREATED, dependencies=[Depends(check_rate_limit)])
async def send_message(
    data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    message = await ChatService(db).create_message(current_user, data)
    return success_response(message, "Message sent")


@router.get("/messages/{classroom_id}")
async def get_messages(
    classroom_id: str,
    limit: int = Query(50, ge=1, le=MAX_HISTORY),
    before: Optional[str] = Query(None, description="ISO timestamp; only older messages are returned"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    messages = await ChatService(db).get_messages(current_user, classroom_id, limit=limit, before=before)
    return success_response(messages)


@router.put("/messages/{message_id}", dependencies=[Depends(check_rate_limit)])
async def edit_message(
    message_id: str,
    data: MessageUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    message = await ChatService(db).update_message(current_user, message_id, data)
    return success_response(message, "Message updated")


@router.delete("/messages/{message_id}", dependencies=[Depends(check_rate_limit)])
async def delete_message(
    message_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await ChatService(db).delete_message(current_user, message_id)
    return success_response(message="Message deleted")


@router.post("/messages/{message_id}/read")
async def mark_message_read(
    message_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    message = await ChatService(db).mark_read(current_user, message_id)
    return success_response({"messageId": message.id, "classroomId": message.classroom_id})


@router.post("/messages/{message_id}/reaction", dependencies=[Depends(check_rate_limit)])
async def toggle_reaction(
    message_id: str,
    data: ReactionRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    result = await ChatService(db).toggle_reaction(current_user, message_id, data.emoji)
    return success_response(result)


@router.get("/classrooms/{classroom_id}/unread-count")
async def get_unread_count(
    classroom_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return success_response(await ChatService(db).unread_count(current_user, classroom_id))
