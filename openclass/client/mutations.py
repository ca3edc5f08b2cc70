# openclass/client/mutations.py
from typing import Any, Awaitable, Callable, Optional
import logging

from ..core.exceptions import ErrorKind
from .http import ApiError
from .invalidation import MutationKind, invalidation_keys
from .notifications import Notifier
from .query_cache import QueryClient

logger = logging.getLogger(__name__)


class MutationRunner:
    """Runs a write, then refreshes the cache and tells the user how it went."""

    def __init__(self, queries: QueryClient, notifier: Notifier):
        self.queries = queries
        self.notifier = notifier

    async def run(
        self,
        kind: MutationKind,
        call: Callable[[], Awaitable[Any]],
        success_message: Optional[str] = None,
        error_message: str = "Request failed",
        on_success: Optional[Callable[[Any], None]] = None,
        **variables
    ) -> Any:
        try:
            result = await call()
        except ApiError as e:
            # Unclassified failures only carry the generic server message
            self.notifier.error(error_message if e.kind is ErrorKind.INTERNAL else e.message)
            raise
        except Exception:
            self.notifier.error(error_message)
            raise

        if on_success is not None:
            on_success(result)
        for key in invalidation_keys(kind, **variables):
            self.queries.invalidate_queries(key)
        if success_message:
            self.notifier.success(success_message)
        logger.debug(f"Mutation {kind.value} succeeded")
        return result
