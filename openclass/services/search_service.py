# openclass/services/search_service.py
"""Term search over posts and public classrooms.

Each query term scores 3 for a title match, 2 for a tag match and 1 for a
body match; the sum is normalised to [0, 1] by the best possible score.
"""
from typing import List
import logging

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import validation_error
from ..models.classroom import Classroom
from ..models.post import Post
from ..schemas.search import SearchResponse, SearchResult
from ..schemas.user import UserSummary

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
TITLE_WEIGHT, TAG_WEIGHT, BODY_WEIGHT = 3, 2, 1


def tokenize(query: str) -> List[str]:
    return [term for term in query.lower().split() if term]


def score(terms: List[str], title: str, body: str, tags: List[str]) -> float:
    if not terms:
        return 0.0
    title, body = (title or "").lower(), (body or "").lower()
    lowered_tags = [tag.lower() for tag in tags]
    total = 0
    for term in terms:
        if term in title:
            total += TITLE_WEIGHT
        if any(term in tag for tag in lowered_tags):
            total += TAG_WEIGHT
        if term in body:
            total += BODY_WEIGHT
    return round(total / ((TITLE_WEIGHT + TAG_WEIGHT + BODY_WEIGHT) * len(terms)), 4)


class SearchService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(self, query: str, type: str = "all", limit: int = 20) -> SearchResponse:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise validation_error(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters",
                details=[{"field": "q", "message": f"minimum length is {MIN_QUERY_LENGTH}"}],
            )
        terms = tokenize(query)

        results: List[SearchResult] = []
        if type in ("all", "posts"):
            results.extend(await self._search_posts(terms, limit))
        if type in ("all", "classrooms"):
            results.extend(await self._search_classrooms(terms, limit))

        # Stable sort keeps newest-first order within equal scores
        results.sort(key=lambda r: r.relevance_score, reverse=True)
        results = results[:limit]
        logger.info(f"Search '{query[:100]}' ({type}) -> {len(results)} results")
        return SearchResponse(query=query, type=type, results=results, total=len(results))

    async def _search_posts(self, terms: List[str], limit: int) -> List[SearchResult]:
        clauses = []
        for term in terms:
            pattern = f"%{term}%"
            clauses.extend([Post.title.ilike(pattern), Post.content.ilike(pattern), Post.tags_json.ilike(pattern)])
        stmt = select(Post).where(or_(*clauses)).order_by(Post.created_at.desc()).limit(limit * 5)
        posts = (await self.db.execute(stmt)).scalars().all()
        return [
            SearchResult(
                id=post.id,
                title=post.title,
                content=post.content,
                type="POST",
                author=UserSummary.model_validate(post.author),
                tags=post.tags,
                relevance_score=score(terms, post.title, post.content, post.tags),
                url=f"/posts/{post.id}",
                created_at=post.created_at,
                updated_at=post.updated_at,
            )
            for post in posts
        ]

    async def _search_classrooms(self, terms: List[str], limit: int) -> List[SearchResult]:
        clauses = []
        for term in terms:
            pattern = f"%{term}%"
            clauses.extend([
                Classroom.name.ilike(pattern),
                Classroom.description.ilike(pattern),
                Classroom.category.ilike(pattern),
            ])
        stmt = (
            select(Classroom)
            .where(Classroom.is_public == True, or_(*clauses))
            .order_by(Classroom.created_at.desc())
            .limit(limit * 5)
        )
        classrooms = (await self.db.execute(stmt)).scalars().all()
        return [
            SearchResult(
                id=classroom.id,
                title=classroom.name,
                content=classroom.description,
                type="CLASSROOM",
                author=UserSummary.model_validate(classroom.owner),
                # Category plays the role of a tag for classrooms
                tags=[classroom.category],
                relevance_score=score(terms, classroom.name, classroom.description, [classroom.category]),
                url=f"/classroom/{classroom.id}",
                created_at=classroom.created_at,
                updated_at=classroom.updated_at,
            )
            for classroom in classrooms
        ]
