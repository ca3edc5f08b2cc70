# openclass/core/database.py
"""Database connection and session management using SQLAlchemy."""
from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text
import logging

from ..models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one application lifetime."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        engine_kwargs: dict = {"echo": echo}
        if database_url.startswith("sqlite"):
            # aiosqlite runs the connection in a worker thread
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_size=15,
                max_overflow=25,
                pool_timeout=60,
                pool_recycle=1800,
                pool_pre_ping=True,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
            autoflush=False,
        )

    async def create_all(self):
        """Create tables for every registered model."""
        # Imported for its side effect of registering the mappers
        from .. import models  # noqa: F401
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    async def drop_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> bool:
        """Fast health check"""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def dispose(self):
        """Properly close all database connections"""
        await self.engine.dispose()
        logger.info("Database connections closed")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            try:
                yield session
            except Exception as e:
                logger.error(f"Database session error: {e!r}")
                await session.rollback()
                raise


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests"""
    database: Database = request.app.state.db
    async for session in database.session():
        yield session
