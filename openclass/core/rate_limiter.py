# openclass/core/rate_limiter.py
from fastapi import Request
from typing import Callable, Dict, List
import time

from .exceptions import rate_limit_error


class RateLimiter:
    """Sliding-window limiter keyed by client address and path."""

    def __init__(self, max_requests: int = 60, window: int = 60, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self.requests: Dict[str, List[float]] = {}
        self._next_sweep = self.clock() + window

    def _sweep(self, now: float):
        """Forget keys whose whole window has expired."""
        expired = [key for key, times in self.requests.items() if not times or now - times[-1] >= self.window]
        for key in expired:
            del self.requests[key]
        self._next_sweep = now + self.window

    def check(self, key: str):
        now = self.clock()
        if now >= self._next_sweep:
            self._sweep(now)

        # Clean old requests
        recent = [t for t in self.requests.get(key, []) if now - t < self.window]

        if len(recent) >= self.max_requests:
            self.requests[key] = recent
            raise rate_limit_error(f"Rate limit exceeded, try again in {self.window} seconds")

        recent.append(now)
        self.requests[key] = recent

    def reset(self):
        self.requests.clear()


async def check_rate_limit(request: Request):
    """FastAPI dependency applied to write endpoints"""
    limiter: RateLimiter = request.app.state.rate_limiter
    client_ip = request.client.host if request.client else "unknown"
    limiter.check(f"{client_ip}:{request.url.path}")
