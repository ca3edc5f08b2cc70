# openclass/utils/pagination.py
"""Pagination utilities for consistent API responses."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from fastapi import Query
from math import ceil

from ..core.config import settings
from ..schemas.common import PaginationInfo
from .responses import serialize


class PaginationParams(BaseModel):
    """Standard pagination parameters."""
    page: int = Field(1, ge=1, description="Page number (starts from 1)")
    limit: int = Field(20, ge=1, description="Items per page")

    @property
    def offset(self) -> int:
        return Paginator.calculate_offset(self.page, self.limit)


class Paginator:
    """Pagination utility class."""

    @staticmethod
    def get_pagination_params(
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page")
    ) -> PaginationParams:
        """FastAPI dependency for pagination parameters."""
        return PaginationParams(page=page, limit=limit)

    @staticmethod
    def calculate_offset(page: int, limit: int) -> int:
        """Calculate offset for database queries."""
        return (page - 1) * limit

    @staticmethod
    def create_meta(page: int, limit: int, total: int) -> PaginationInfo:
        """Create pagination metadata."""
        total_pages = ceil(total / limit) if limit > 0 else 0
        return PaginationInfo(page=page, limit=limit, total=total, total_pages=total_pages)

    @staticmethod
    def create_response(
        items: List[Any],
        page: int,
        limit: int,
        total: int,
        message: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create standardized paginated response."""
        meta = Paginator.create_meta(page, limit, total)
        response = {
            "success": True,
            "data": serialize(items),
            "pagination": meta.model_dump(by_alias=True),
        }
        if message:
            response["message"] = message
        return response
