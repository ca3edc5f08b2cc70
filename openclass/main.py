# openclass/main.py
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging
import time

from .core.cache import CacheManager
from .core.config import Settings, settings as default_settings
from .core.database import Database
from .core.error_handlers import register_error_handlers
from .core.logging import setup_logging
from .core.rate_limiter import RateLimiter
from .routers import chat, classrooms, health, posts, profile, search, upload

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting OpenClass API")

    await app.state.db.create_all()
    await app.state.cache.initialize()
    logger.info("Cache initialized" if app.state.cache.enabled else "Cache disabled")

    yield

    logger.info("Shutting down OpenClass API")
    await app.state.cache.close()
    await app.state.db.dispose()
    logger.info("Shutdown complete")


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(
        title="OpenClass API",
        description="Classroom content sharing: classrooms, posts, chat, uploads and search",
        version=settings.app_version,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db = Database(settings.database_url)
    app.state.cache = CacheManager(settings.redis_url, namespace=settings.app_name)
    app.state.rate_limiter = RateLimiter(max_requests=settings.rate_limit_per_minute, window=60)
    app.state.started_at = time.monotonic()

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(classrooms.router)
    app.include_router(posts.router)
    app.include_router(profile.router)
    app.include_router(search.router)
    app.include_router(chat.router)
    app.include_router(upload.router)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.upload_base_url, StaticFiles(directory=upload_dir), name="uploads")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("openclass.main:app", host="0.0.0.0", port=5001, reload=True)
