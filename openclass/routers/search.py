# openclass/routers/search.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.cache_decorators import cache_response
from ..core.config import settings
from ..core.database import get_db
from ..schemas.search import SearchType
from ..services.search_service import SearchService
from ..utils.responses import error_responses, success_response

router = APIRouter(prefix="/api/search", tags=["Search"], responses=error_responses(400))


@router.get("")
@cache_response("search", ttl=settings.search_cache_ttl)
async def search(
    request: Request,
    q: str = Query("", description="Search terms, at least two characters"),
    type: SearchType = Query("all"),
    limit: int = Query(20, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
):
    return success_response(await SearchService(db).search(q, type=type, limit=limit))
