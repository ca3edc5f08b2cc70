# openclass/core/auth.py
"""Caller identification.

Sessions and tokens are handled in front of this service; requests arrive
with the caller's user id in the ``X-User-Id`` header.
"""
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_db
from .exceptions import authentication_error
from ..models.user import User


async def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    db: AsyncSession = Depends(get_db)
) -> User:
    if not x_user_id:
        raise authentication_error("Authentication required")
    user = await db.get(User, x_user_id)
    if not user or not user.is_active:
        raise authentication_error("Unknown or inactive user")
    return user
