# openclass/seed.py
"""Populate the demonstration records.

Every row is upserted on a unique key with an empty update, so running the
seed again leaves existing rows untouched and creates no duplicates.
"""
import asyncio
import logging
from typing import Any, Dict, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .core.config import settings
from .core.database import Database
from .core.logging import setup_logging
from .models.classroom import Category, Classroom, ClassroomMembership
from .models.post import Post
from .models.user import User

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEMO_USER_EMAIL = "test@openclass.ai"
DEMO_CLASSROOM_ID = "test-classroom-1"

CATEGORIES = [
    {"name": "Programming", "description": "Classrooms about programming", "color": "#3B82F6"},
    {"name": "Design", "description": "Classrooms about design", "color": "#EF4444"},
    {"name": "Marketing", "description": "Classrooms about marketing", "color": "#10B981"},
]

POSTS = [
    {
        "id": "test-post-1",
        "title": "JavaScript Variables and Data Types",
        "content": (
            "How to declare variables in JavaScript and the basic data types. "
            "Covers the differences between var, let and const, and strings, numbers and booleans."
        ),
        "type": "document",
        "tags": ["JavaScript", "variables", "data types"],
    },
    {
        "id": "test-post-2",
        "title": "Functions and Scope",
        "content": (
            "Defining and calling JavaScript functions and the idea of scope, "
            "including function declarations versus function expressions."
        ),
        "type": "document",
        "tags": ["JavaScript", "functions", "scope"],
    },
]


async def upsert(
    session: AsyncSession,
    model: Type[T],
    where: Dict[str, Any],
    create: Dict[str, Any],
    update: Dict[str, Any] = None
) -> T:
    """Insert ``create`` unless a row matching ``where`` exists; then apply ``update``."""
    stmt = select(model)
    for key, value in where.items():
        stmt = stmt.where(getattr(model, key) == value)
    obj = (await session.execute(stmt)).scalar_one_or_none()
    if obj is None:
        obj = model(**{**where, **create})
        session.add(obj)
        await session.flush()
    else:
        for key, value in (update or {}).items():
            setattr(obj, key, value)
    return obj


async def seed(session: AsyncSession) -> Dict[str, Any]:
    categories = []
    for category in CATEGORIES:
        categories.append(await upsert(
            session, Category,
            where={"name": category["name"]},
            create={"description": category["description"], "color": category["color"]},
        ))
    logger.info("Categories ready")

    user = await upsert(
        session, User,
        where={"email": DEMO_USER_EMAIL},
        create={
            # Placeholder hash; the demo account is not meant for password login
            "password": "$2b$10$example",
            "name": "Test User",
            "first_name": "Test",
            "last_name": "User",
            "role": "student",
            "is_active": True,
            "is_verified": True,
        },
    )
    logger.info("Demo user ready")

    classroom = await upsert(
        session, Classroom,
        where={"id": DEMO_CLASSROOM_ID},
        create={
            "name": "JavaScript Basics",
            "description": "A classroom for learning the core concepts of JavaScript.",
            "category": "Programming",
            "level": "beginner",
            "owner_id": user.id,
            "is_public": True,
            "allow_chat": True,
        },
    )
    await upsert(
        session, ClassroomMembership,
        where={"user_id": user.id, "classroom_id": classroom.id},
        create={"role": "owner"},
    )
    logger.info("Demo classroom ready")

    posts = []
    for post in POSTS:
        posts.append(await upsert(
            session, Post,
            where={"id": post["id"]},
            create={
                "title": post["title"],
                "content": post["content"],
                "author_id": user.id,
                "classroom_id": classroom.id,
                "type": post["type"],
                "tags": post["tags"],
            },
        ))
    logger.info("Demo posts ready")

    await session.commit()
    return {"categories": categories, "user": user, "classroom": classroom, "posts": posts}


async def run(database_url: str = None):
    database = Database(database_url or settings.database_url)
    try:
        await database.create_all()
        async with database.session_factory() as session:
            await seed(session)
        logger.info("Seed data complete")
    finally:
        await database.dispose()


def main():
    setup_logging()
    try:
        asyncio.run(run())
    except Exception:
        logger.exception("Seeding failed")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
