# openclass/client/resources/classrooms.py
from typing import Any, Dict, List, Optional
import logging

from .base import MINUTE, Resource
from ..invalidation import MutationKind

logger = logging.getLogger(__name__)


class ClassroomResource(Resource):
    LIST_STALE_TIME = 5 * MINUTE

    async def list(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        level: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Classroom cards for the explore view.

        A failed load yields an empty list instead of an error so the view
        can still render.
        """
        params = {"page": page, "limit": limit, "category": category, "level": level}

        async def fetch():
            envelope = await self.api.get("/classrooms", params=params)
            return envelope.get("data") or []

        try:
            return await self.queries.fetch_query(
                ("classrooms", params), fetch, stale_time=self.LIST_STALE_TIME, retry=1
            )
        except Exception as e:
            logger.warning(f"Classroom list unavailable, showing none: {e!r}")
            return []

    async def get(self, classroom_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return await self.queries.fetch_query(
            ("classrooms", classroom_id),
            lambda: self.api.get(f"/classrooms/{classroom_id}"),
            enabled=bool(classroom_id),
        )

    async def create(
        self,
        name: str,
        category: str,
        level: str = "beginner",
        description: Optional[str] = None,
        **extra
    ) -> Dict[str, Any]:
        payload = {"name": name, "category": category, "level": level, "description": description, **extra}
        return await self.mutations.run(
            MutationKind.CREATE_CLASSROOM,
            lambda: self.api.post("/classrooms", json=payload),
            success_message="Classroom created",
            error_message="Failed to create classroom",
        )

    async def join(self, classroom_id: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.JOIN_CLASSROOM,
            lambda: self.api.post(f"/classrooms/{classroom_id}/join"),
            success_message="Joined classroom",
            error_message="Failed to join classroom",
        )

    async def leave(self, classroom_id: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.LEAVE_CLASSROOM,
            lambda: self.api.post(f"/classrooms/{classroom_id}/leave"),
            success_message="Left classroom",
            error_message="Failed to leave classroom",
        )

    async def toggle_like(self, classroom_id: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.TOGGLE_CLASSROOM_LIKE,
            lambda: self.api.post(f"/profile/classroom/{classroom_id}/like"),
            error_message="Failed to update classroom like",
        )
