# openclass/client/resources/search.py
from typing import Any, Dict, Optional

from .base import SECOND, Resource

MIN_QUERY_LENGTH = 2


class SearchResource(Resource):
    STALE_TIME = 30 * SECOND

    async def search(self, query: Optional[str], type: str = "all") -> Optional[Dict[str, Any]]:
        """Search posts and classrooms; queries under two characters never hit the server."""
        return await self.queries.fetch_query(
            ("search", query, type),
            lambda: self.api.get("/search", params={"q": query, "type": type}),
            stale_time=self.STALE_TIME,
            enabled=bool(query) and len(query) >= MIN_QUERY_LENGTH,
        )
