"""Tests for the client query cache (no network, fake clock)."""

import asyncio

import pytest

from openclass.client.query_cache import QueryClient, normalize_key

from .helpers import FakeClock


class Counter:
    """Fetcher that counts calls and can be told to fail."""

    def __init__(self, value="data", fail_times: int = 0):
        self.value = value
        self.calls = 0
        self.fail_times = fail_times

    async def __call__(self):
        self.calls += 1
        if self.calls <= self.fail_times:
            raise RuntimeError(f"failure {self.calls}")
        return f"{self.value}-{self.calls}"


@pytest.fixture
def queries(clock):
    return QueryClient(clock=clock, gc_time=300)


class TestKeys:
    """Key normalisation."""

    def test_dict_params_are_order_independent(self):
        assert normalize_key(("posts", {"page": 1, "limit": 10})) == normalize_key(("posts", {"limit": 10, "page": 1}))

    def test_none_params_are_dropped(self):
        assert normalize_key(("posts", {"page": 1, "type": None})) == normalize_key(("posts", {"page": 1}))

    def test_string_key(self):
        assert normalize_key("posts") == ("posts",)


class TestStaleness:
    """Fresh entries are served from cache until their window passes."""

    async def test_fresh_entry_skips_fetcher(self, queries, clock):
        fetch = Counter()
        assert await queries.fetch_query(("profile", "me"), fetch, stale_time=300) == "data-1"
        clock.advance(299)
        assert await queries.fetch_query(("profile", "me"), fetch, stale_time=300) == "data-1"
        assert fetch.calls == 1

    async def test_stale_entry_refetches(self, queries, clock):
        fetch = Counter()
        await queries.fetch_query(("profile", "me"), fetch, stale_time=300)
        clock.advance(300)
        assert queries.is_stale(("profile", "me"))
        assert await queries.fetch_query(("profile", "me"), fetch, stale_time=300) == "data-2"

    async def test_zero_stale_time_always_refetches(self, queries):
        fetch = Counter()
        await queries.fetch_query(("messages", "c1"), fetch)
        await queries.fetch_query(("messages", "c1"), fetch)
        assert fetch.calls == 2

    def test_unknown_key_is_stale(self, queries):
        assert queries.is_stale(("nothing",))


class TestEnabledGuard:
    """Disabled queries never call the fetcher."""

    async def test_disabled_returns_none_without_fetching(self, queries):
        fetch = Counter()
        assert await queries.fetch_query(("search", "a", "all"), fetch, enabled=False) is None
        assert fetch.calls == 0

    async def test_disabled_returns_cached_data(self, queries):
        queries.set_query_data(("post", "p1"), {"id": "p1"})
        fetch = Counter()
        assert await queries.fetch_query(("post", "p1"), fetch, enabled=False) == {"id": "p1"}
        assert fetch.calls == 0


class TestInvalidation:
    """Prefix invalidation marks entries stale."""

    async def test_prefix_matches_all_descendants(self, queries):
        fetch = Counter()
        await queries.fetch_query(("posts", {"page": 1}), fetch, stale_time=600)
        await queries.fetch_query(("posts", {"page": 2}), fetch, stale_time=600)
        await queries.fetch_query(("post", "p1"), fetch, stale_time=600)

        invalidated = queries.invalidate_queries(("posts",))

        assert len(invalidated) == 2
        assert queries.is_stale(("posts", {"page": 1}))
        assert queries.is_stale(("posts", {"page": 2}))
        assert not queries.is_stale(("post", "p1"))

    async def test_prefix_is_matched_per_item(self, queries):
        queries.set_query_data(("profile", "me"), 1)
        queries.set_query_data(("profile", "me", "activity"), 2)
        queries.set_query_data(("profile", "user", "u1"), 3)

        invalidated = queries.invalidate_queries(("profile", "me"))

        assert set(invalidated) == {("profile", "me"), ("profile", "me", "activity")}

    async def test_invalidated_entry_refetches_even_when_fresh(self, queries):
        fetch = Counter()
        await queries.fetch_query(("classrooms", "c1"), fetch, stale_time=600)
        queries.invalidate_queries(("classrooms",))
        assert await queries.fetch_query(("classrooms", "c1"), fetch, stale_time=600) == "data-2"
        assert not queries.is_stale(("classrooms", "c1"))

    async def test_invalidation_during_fetch_keeps_result_stale(self, queries):
        calls = 0
        release = asyncio.Event()

        async def gated():
            nonlocal calls
            calls += 1
            if calls == 1:
                await release.wait()
            return f"v{calls}"

        first = asyncio.ensure_future(queries.fetch_query(("posts",), gated, stale_time=300))
        await asyncio.sleep(0)
        assert queries.invalidate_queries(("posts",)) == [("posts",)]
        release.set()

        assert await first == "v1"
        assert queries.is_stale(("posts",))
        assert await queries.fetch_query(("posts",), gated, stale_time=300) == "v2"
        assert calls == 2

    async def test_caller_after_invalidation_does_not_join_old_fetch(self, queries):
        calls = 0
        release = asyncio.Event()

        async def gated():
            nonlocal calls
            calls += 1
            if calls == 1:
                await release.wait()
            return f"v{calls}"

        first = asyncio.ensure_future(queries.fetch_query(("posts",), gated, stale_time=300))
        await asyncio.sleep(0)
        queries.invalidate_queries(("posts",))

        assert await queries.fetch_query(("posts",), gated, stale_time=300) == "v2"
        release.set()
        assert await first == "v1"

        # The older result does not replace the newer one
        assert queries.get_query_data(("posts",)) == "v2"
        assert await queries.fetch_query(("posts",), gated, stale_time=300) == "v2"
        assert calls == 2

    def test_remove_queries(self, queries):
        queries.set_query_data(("unread", "c1"), 3)
        assert queries.remove_queries(("unread",)) == [("unread", "c1")]
        assert ("unread", "c1") not in queries


class TestFailures:
    """Retries and error propagation."""

    async def test_retry_then_succeed(self, queries):
        fetch = Counter(fail_times=1)
        assert await queries.fetch_query(("classrooms", ()), fetch, retry=1) == "data-2"

    async def test_error_propagates_after_retries(self, queries):
        fetch = Counter(fail_times=5)
        with pytest.raises(RuntimeError):
            await queries.fetch_query(("posts",), fetch, retry=2)
        assert fetch.calls == 3

    async def test_previous_data_kept_on_failure(self, queries):
        queries.set_query_data(("post", "p1"), "old")
        queries.invalidate_queries(("post",))

        async def broken():
            raise RuntimeError("down")

        with pytest.raises(RuntimeError):
            await queries.fetch_query(("post", "p1"), broken)
        assert queries.get_query_data(("post", "p1")) == "old"
        assert isinstance(queries.get_state(("post", "p1")).error, RuntimeError)


class TestDedup:
    """Concurrent fetches of one key share a single request."""

    async def test_concurrent_fetches_share_one_call(self, queries):
        calls = 0
        release = asyncio.Event()

        async def slow():
            nonlocal calls
            calls += 1
            await release.wait()
            return "shared"

        first = asyncio.ensure_future(queries.fetch_query(("posts",), slow))
        second = asyncio.ensure_future(queries.fetch_query(("posts",), slow))
        await asyncio.sleep(0)
        release.set()

        assert await asyncio.gather(first, second) == ["shared", "shared"]
        assert calls == 1


class TestSetDataAndGc:
    """Direct writes and garbage collection."""

    def test_set_query_data_is_fresh(self, queries):
        queries.set_query_data(("profile", "me"), {"name": "A"})
        assert queries.get_query_data(("profile", "me")) == {"name": "A"}
        assert not queries.is_stale(("profile", "me"), stale_time=60)

    def test_set_query_data_with_updater(self, queries):
        queries.set_query_data(("unread", "c1"), 1)
        assert queries.set_query_data(("unread", "c1"), lambda old: old + 1) == 2

    async def test_gc_evicts_idle_entries(self, queries, clock):
        queries.set_query_data(("old",), 1)
        clock.advance(200)
        await queries.fetch_query(("recent",), Counter())
        clock.advance(150)

        assert queries.gc() == [("old",)]
        assert ("recent",) in queries

    def test_clear(self):
        queries = QueryClient(clock=FakeClock())
        queries.set_query_data(("a",), 1)
        queries.clear()
        assert queries.keys() == []
