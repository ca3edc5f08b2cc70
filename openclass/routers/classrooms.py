# openclass/routers/classrooms.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import get_current_user
from ..core.cache_decorators import cache_response, invalidate_cache_pattern
from ..core.config import settings
from ..core.database import get_db
from ..core.rate_limiter import check_rate_limit
from ..models.user import User
from ..schemas.classroom import ClassroomCreate
from ..services.classroom_service import ClassroomService
from ..utils.pagination import Paginator, PaginationParams
from ..utils.responses import error_responses, success_response

router = APIRouter(prefix="/api/classrooms", tags=["Classrooms"], responses=error_responses(400, 401, 403, 404, 409, 429))


@router.get("")
@cache_response("classrooms:list", ttl=settings.classroom_cache_ttl)
async def list_classrooms(
    request: Request,
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    category: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Public classrooms, newest first"""
    service = ClassroomService(db)
    items, total = await service.list_classrooms(
        page=pagination.page,
        limit=pagination.limit,
        category=category,
        level=level,
    )
    return Paginator.create_response(items, pagination.page, pagination.limit, total)


@router.get("/{classroom_id}")
async def get_classroom(classroom_id: str, db: AsyncSession = Depends(get_db)):
    service = ClassroomService(db)
    return success_response(await service.get_classroom(classroom_id))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(check_rate_limit)])
@invalidate_cache_pattern("classrooms:*", "search:*")
async def create_classroom(
    request: Request,
    data: ClassroomCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ClassroomService(db)
    classroom = await service.create_classroom(current_user, data)
    return success_response(classroom, "Classroom created successfully")


@router.post("/{classroom_id}/join", dependencies=[Depends(check_rate_limit)])
@invalidate_cache_pattern("classrooms:*")
async def join_classroom(
    request: Request,
    classroom_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ClassroomService(db)
    membership = await service.join(current_user, classroom_id)
    return success_response(membership, "Joined classroom")


@router.post("/{classroom_id}/leave", dependencies=[Depends(check_rate_limit)])
@invalidate_cache_pattern("classrooms:*")
async def leave_classroom(
    request: Request,
    classroom_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = ClassroomService(db)
    membership = await service.leave(current_user, classroom_id)
    return success_response(membership, "Left classroom")
