# openclass/client/query_cache.py
"""Keyed cache of server reads with staleness, invalidation and dedup.

Entries are addressed by tuple keys such as ``("profile", "me")``.
Invalidation works on key prefixes: invalidating ``("posts",)`` marks every
entry whose key starts with ``"posts"`` as stale, and the next
``fetch_query`` for such a key goes back to the server.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Optional, Sequence, Tuple
import asyncio
import logging
import time

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]
Fetcher = Callable[[], Awaitable[Any]]


def _normalize_part(part: Any) -> Hashable:
    if isinstance(part, dict):
        return tuple(sorted((k, _normalize_part(v)) for k, v in part.items() if v is not None))
    if isinstance(part, (list, tuple)):
        return tuple(_normalize_part(p) for p in part)
    return part


def normalize_key(key: Sequence[Any]) -> QueryKey:
    """Make a key hashable and independent of parameter order."""
    if isinstance(key, str):
        return (key,)
    return tuple(_normalize_part(part) for part in key)


@dataclass
class QueryState:
    data: Any = None
    error: Optional[BaseException] = None
    updated_at: Optional[float] = None
    last_accessed: float = 0.0
    stale_time: float = 0.0
    invalidated: bool = False
    fetch_count: int = 0


class QueryClient:
    def __init__(self, clock: Callable[[], float] = time.monotonic, gc_time: float = 300):
        self.clock = clock
        self.gc_time = gc_time
        self._queries: Dict[QueryKey, QueryState] = {}
        self._inflight: Dict[QueryKey, asyncio.Future] = {}
        # Bumped when an in-flight key is invalidated; a fetch started under
        # an older generation never stores its result as fresh.
        self._generations: Dict[QueryKey, int] = {}

    def __contains__(self, key) -> bool:
        return normalize_key(key) in self._queries

    def keys(self) -> List[QueryKey]:
        return list(self._queries)

    def get_state(self, key) -> Optional[QueryState]:
        return self._queries.get(normalize_key(key))

    def _entry_is_stale(self, state: QueryState, stale_time: float, now: float) -> bool:
        if state.invalidated or state.updated_at is None:
            return True
        return now - state.updated_at >= stale_time

    def is_stale(self, key, stale_time: Optional[float] = None) -> bool:
        """Whether the next fetch would hit the server; unknown keys are stale."""
        state = self.get_state(key)
        if state is None:
            return True
        if stale_time is None:
            stale_time = state.stale_time
        return self._entry_is_stale(state, stale_time, self.clock())

    def get_query_data(self, key) -> Any:
        state = self.get_state(key)
        return state.data if state else None

    def set_query_data(self, key, data: Any) -> Any:
        """Store data as fresh; a callable receives the current data and returns the new value."""
        key = normalize_key(key)
        state = self._queries.setdefault(key, QueryState())
        if callable(data):
            data = data(state.data)
        now = self.clock()
        state.data = data
        state.error = None
        state.updated_at = now
        state.last_accessed = now
        state.invalidated = False
        return data

    async def fetch_query(
        self,
        key,
        fetcher: Fetcher,
        stale_time: float = 0,
        enabled: bool = True,
        retry: int = 0
    ) -> Any:
        key = normalize_key(key)
        now = self.clock()
        state = self._queries.get(key)
        if state is not None:
            state.last_accessed = now
            state.stale_time = stale_time

        if not enabled:
            return state.data if state else None

        if state is not None and not self._entry_is_stale(state, stale_time, now):
            return state.data

        inflight = self._inflight.get(key)
        if inflight is None:
            generation = self._generations.get(key, 0)
            inflight = asyncio.ensure_future(self._run(key, fetcher, stale_time, retry, generation))
            self._inflight[key] = inflight
            inflight.add_done_callback(lambda done: self._forget(key, done))
        return await asyncio.shield(inflight)

    def _forget(self, key: QueryKey, future: asyncio.Future):
        if self._inflight.get(key) is future:
            del self._inflight[key]

    async def _run(
        self,
        key: QueryKey,
        fetcher: Fetcher,
        stale_time: float,
        retry: int,
        generation: int = 0
    ) -> Any:
        last_error: Optional[BaseException] = None
        for attempt in range(retry + 1):
            try:
                data = await fetcher()
            except Exception as e:
                last_error = e
                logger.warning(f"Query {key} failed (attempt {attempt + 1}/{retry + 1}): {e!r}")
                continue

            state = self._queries.setdefault(key, QueryState())
            now = self.clock()
            state.fetch_count += 1
            if self._generations.get(key, 0) != generation:
                # Invalidated while in flight: stored stale, never over a newer result
                logger.debug(f"Query {key} was invalidated during its fetch")
                if state.updated_at is None:
                    state.data = data
                    state.invalidated = True
                return data

            state.data = data
            state.error = None
            state.updated_at = now
            state.last_accessed = now
            state.stale_time = stale_time
            state.invalidated = False
            return data

        # Previous data stays readable after a failed refetch
        state = self._queries.setdefault(key, QueryState(last_accessed=self.clock()))
        state.error = last_error
        raise last_error

    def _matching(self, prefix, keys=None) -> List[QueryKey]:
        prefix = normalize_key(prefix)
        candidates = self._queries if keys is None else keys
        return [key for key in candidates if key[:len(prefix)] == prefix]

    def invalidate_queries(self, prefix) -> List[QueryKey]:
        """Mark every entry under ``prefix`` stale and return their keys.

        Fetches in flight under ``prefix`` are detached: the next caller
        starts a new request, and the detached result is stored as stale.
        """
        keys = self._matching(prefix)
        for key in keys:
            self._queries[key].invalidated = True
        for key in self._matching(prefix, list(self._inflight)):
            self._generations[key] = self._generations.get(key, 0) + 1
            del self._inflight[key]
            if key not in keys:
                keys.append(key)
        if keys:
            logger.debug(f"Invalidated {len(keys)} queries under {normalize_key(prefix)}")
        return keys

    def remove_queries(self, prefix) -> List[QueryKey]:
        keys = self._matching(prefix)
        for key in keys:
            del self._queries[key]
        return keys

    def clear(self):
        self._queries.clear()

    def gc(self) -> List[QueryKey]:
        """Drop entries that have not been read for longer than ``gc_time``."""
        now = self.clock()
        expired = [
            key for key, state in self._queries.items()
            if key not in self._inflight and now - state.last_accessed > self.gc_time
        ]
        for key in expired:
            del self._queries[key]
        return expired
