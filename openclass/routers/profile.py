# openclass/routers/profile.py
"""User profile, activity and like endpoints."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ..core.auth import get_current_user
from ..core.cache_decorators import invalidate_cache_pattern
from ..core.database import get_db
from ..core.exceptions import authorization_error
from ..core.rate_limiter import check_rate_limit
from ..models.user import User
from ..schemas.user import UpdateProfileRequest
from ..services.like_service import LikeService
from ..services.profile_service import ProfileService
from ..utils.responses import error_responses, success_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profile", tags=["Profile"], responses=error_responses(400, 401, 403, 404, 429))


@router.get("/me")
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return success_response(await ProfileService(db).get_profile(current_user.id))


@router.put("/me", dependencies=[Depends(check_rate_limit)])
async def update_my_profile(
    data: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    profile = await ProfileService(db).update_profile(current_user.id, data)
    return success_response(profile, "Profile updated successfully")


@router.get("/me/activity")
async def get_my_activity(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return success_response(await ProfileService(db).get_activity(current_user.id))


@router.get("/user/{user_id}")
async def get_user_profile(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Public view of another user; email is only shown to its owner"""
    profile = await ProfileService(db).get_profile(user_id, include_private=user_id == current_user.id)
    return success_response(profile)


@router.get("/user/{user_id}/activity")
async def get_user_activity(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    if user_id != current_user.id:
        logger.warning(f"User {current_user.id} denied activity of {user_id}")
        raise authorization_error("You can only view your own activity")
    return success_response(await ProfileService(db).get_activity(user_id))


@router.get("/user/{user_id}/stats")
async def get_user_stats(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    await service.get_or_404(user_id)
    return success_response(await service.get_stats(user_id))


@router.post("/classroom/{classroom_id}/like", dependencies=[Depends(check_rate_limit)])
@invalidate_cache_pattern("classrooms:*")
async def toggle_classroom_like(
    request: Request,
    classroom_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    result = await LikeService(db).toggle_classroom_like(current_user.id, classroom_id)
    return success_response(result)


@router.post("/post/{post_id}/like", dependencies=[Depends(check_rate_limit)])
async def toggle_post_like(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    result = await LikeService(db).toggle_post_like(current_user.id, post_id)
    return success_response(result)
