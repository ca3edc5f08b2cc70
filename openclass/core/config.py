# openclass/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    database_url: str = 'sqlite+aiosqlite:///./openclass.db'
    # Server-side response cache is disabled when no Redis URL is configured
    redis_url: Optional[str] = None

    app_name: str = 'openclass'
    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'INFO'
    allowed_origins: List[str] = ['*']

    # Uploads (local disk storage)
    upload_dir: str = './uploads'
    upload_base_url: str = '/uploads'
    max_upload_size: int = 10 * 1024 * 1024
    allowed_upload_extensions: List[str] = [
        'jpg', 'jpeg', 'png', 'gif', 'webp',
        'pdf', 'doc', 'docx', 'ppt', 'pptx', 'txt', 'md',
        'mp4', 'mov', 'webm', 'mp3', 'wav',
    ]

    # Rate limiting for write endpoints
    rate_limit_per_minute: int = 60

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # Server cache TTLs (seconds)
    classroom_cache_ttl: int = 300
    search_cache_ttl: int = 30

    # Client defaults
    api_base_url: str = 'http://localhost:5001/api'

    model_config = {
        'env_file': '.env',
        'env_prefix': 'OPENCLASS_',
        'extra': 'ignore'
    }

settings = Settings()
