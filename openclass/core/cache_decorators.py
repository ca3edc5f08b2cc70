# openclass/core/cache_decorators.py
"""Cache decorators for FastAPI endpoints."""
import functools
from typing import Callable
from fastapi import Request

from .cache import CacheManager

# Endpoint arguments that never belong in a cache key
_UNKEYED = ('request', 'db', 'session', 'current_user')


def _cache_for(kwargs) -> CacheManager:
    request: Request = kwargs['request']
    return request.app.state.cache


def cache_response(
    key_prefix: str,
    ttl: int = 300,
    include_params: bool = True
):
    """Cache decorator for FastAPI endpoints.

    The endpoint must accept ``request: Request`` so the application's cache
    manager can be found.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            cache = _cache_for(kwargs)

            key_parts = [key_prefix]
            if include_params:
                for key, value in sorted(kwargs.items()):
                    if key not in _UNKEYED:
                        key_parts.append(f"{key}:{value}")
            cache_key = cache.make_key(*key_parts)

            cached_result = await cache.get(cache_key)
            if cached_result is not None:
                return cached_result

            result = await func(*args, **kwargs)

            await cache.set(cache_key, result, ttl=ttl)
            return result

        return wrapper
    return decorator


def invalidate_cache_pattern(*patterns: str):
    """Decorator to invalidate cache patterns after a successful write."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            result = await func(*args, **kwargs)
            cache = _cache_for(kwargs)
            for pattern in patterns:
                await cache.delete_pattern(cache.make_key(pattern))
            return result
        return wrapper
    return decorator
