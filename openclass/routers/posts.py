# openclass/routers/posts.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.cache_decorators import invalidate_cache_pattern
from ..core.database import get_db
from ..core.rate_limiter import check_rate_limit
from ..models.user import User
from ..schemas.post import PostCreate, PostType
from ..services.like_service import LikeService
from ..services.post_service import PostService
from ..utils.pagination import Paginator, PaginationParams
from ..utils.responses import error_responses, success_response

router = APIRouter(prefix="/api/posts", tags=["Posts"], responses=error_responses(400, 401, 404, 409, 429))


@router.get("")
async def list_posts(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    classroom_id: Optional[str] = Query(None, alias="classroomId"),
    type: Optional[PostType] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    service = PostService(db)
    items, total = await service.list_posts(
        page=pagination.page,
        limit=pagination.limit,
        classroom_id=classroom_id,
        type=type,
    )
    return Paginator.create_response(items, pagination.page, pagination.limit, total)


@router.get("/{post_id}")
async def get_post(post_id: str, db: AsyncSession = Depends(get_db)):
    return success_response(await PostService(db).get_post(post_id))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(check_rate_limit)])
@invalidate_cache_pattern("search:*")
async def create_post(
    request: Request,
    data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    post = await PostService(db).create_post(current_user, data)
    return success_response(post, "Post created successfully")


@router.post("/{post_id}/like", dependencies=[Depends(check_rate_limit)])
async def toggle_post_like(
    post_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Like the post, or remove the caller's existing like"""
    result = await LikeService(db).toggle_post_like(current_user.id, post_id)
    return success_response(result)
