# openclass/services/base_service.py
"""Base service with common CRUD operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Type, Any, Dict, Optional, TypeVar, Generic

from ..core.exceptions import not_found_error
from ..utils.pagination import Paginator

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    resource_name = "Resource"

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any) -> T:
        obj = await self.get(id)
        if obj is None:
            raise not_found_error(self.resource_name, id)
        return obj

    async def get_paginated(
        self,
        page: int = 1,
        limit: int = 20,
        order_by: str = "created_at",
        sort: str = "desc",
        **filters
    ) -> Dict[str, Any]:
        """Get one page of rows matching equality filters (None values are ignored)"""
        offset = Paginator.calculate_offset(page, limit)

        # Build base query
        stmt = select(self.model)
        count_stmt = select(func.count()).select_from(self.model)

        for key, value in filters.items():
            if value is not None and hasattr(self.model, key):
                stmt = stmt.where(getattr(self.model, key) == value)
                count_stmt = count_stmt.where(getattr(self.model, key) == value)

        total = (await self.db.execute(count_stmt)).scalar() or 0

        # Add ordering if specified
        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            if sort.lower() == "desc":
                stmt = stmt.order_by(order_field.desc(), self.model.id)
            else:
                stmt = stmt.order_by(order_field.asc(), self.model.id)

        # Execute main query with pagination
        stmt = stmt.offset(offset).limit(limit)
        result = await self.db.execute(stmt)
        items = result.scalars().all()

        return {
            "items": items,
            "total": total,
            "page": page,
            "limit": limit,
        }

    async def refetch(self, id: Any) -> Optional[T]:
        """Reload a row and its eager relationships after a write"""
        stmt = select(self.model).where(self.model.id == id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.db.commit()
        return await self.refetch(obj.id)

    async def update(self, id: Any, obj_in: Dict) -> T:
        obj = await self.get_or_404(id)
        for key, value in obj_in.items():
            setattr(obj, key, value)
        await self.db.commit()
        return await self.refetch(obj.id)

    async def count(self, *conditions) -> int:
        stmt = select(func.count()).select_from(self.model)
        for condition in conditions:
            stmt = stmt.where(condition)
        return (await self.db.execute(stmt)).scalar() or 0
