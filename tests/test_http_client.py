"""Tests for ApiClient error classification and resource guards (mocked transport)."""

import httpx
import pytest

from openclass.client import ApiClient, ApiError, OpenClassClient, QueryClient
from openclass.core.exceptions import ErrorKind


def mock_api(handler, **kwargs) -> ApiClient:
    return ApiClient(base_url="http://test/api", transport=httpx.MockTransport(handler), **kwargs)


class TestApiClient:
    """Envelopes on success, ApiError on failure."""

    async def test_success_returns_envelope_and_sends_identity(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["user"] = request.headers.get("x-user-id")
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"success": True, "data": []})

        async with mock_api(handler, user_id="u1") as api:
            body = await api.get("/posts", params={"page": 1, "type": None})

        assert body == {"success": True, "data": []}
        assert seen == {"path": "/api/posts", "user": "u1", "params": {"page": "1"}}

    async def test_known_code_is_classified(self):
        def handler(request):
            return httpx.Response(409, json={"success": False, "error": "Already a member", "code": "CONFLICT_ERROR"})

        async with mock_api(handler) as api:
            with pytest.raises(ApiError) as info:
                await api.post("/classrooms/c1/join")

        assert info.value.kind is ErrorKind.CONFLICT
        assert info.value.message == "Already a member"
        assert info.value.status_code == 409

    async def test_validation_details_are_kept(self):
        details = [{"field": "name", "message": "Field required"}]

        def handler(request):
            return httpx.Response(400, json={"success": False, "error": "Invalid", "code": "VALIDATION_ERROR", "details": details})

        async with mock_api(handler) as api:
            with pytest.raises(ApiError) as info:
                await api.post("/classrooms", json={})
        assert info.value.details == details

    async def test_unknown_code_becomes_generic_internal(self):
        def handler(request):
            return httpx.Response(502, text="upstream exploded: stack trace here")

        async with mock_api(handler) as api:
            with pytest.raises(ApiError) as info:
                await api.get("/posts")

        assert info.value.kind is ErrorKind.INTERNAL
        assert info.value.message == "Internal server error"

    async def test_transport_failure_is_internal(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with mock_api(handler) as api:
            with pytest.raises(ApiError) as info:
                await api.get("/posts")
        assert info.value.kind is ErrorKind.INTERNAL

    async def test_unauthenticated_clears_credentials(self):
        def handler(request):
            return httpx.Response(401, json={"success": False, "error": "Authentication required", "code": "AUTHENTICATION_ERROR"})

        async with mock_api(handler, token="t", user_id="u1") as api:
            with pytest.raises(ApiError):
                await api.get("/profile/me")
            assert api.token is None
            assert api.user_id is None


class TestResourceGuards:
    """Guards stop requests before they reach the network."""

    @pytest.fixture
    def recorder(self, clock):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"success": True, "data": {"results": []}})

        client = OpenClassClient(mock_api(handler), queries=QueryClient(clock=clock))
        return client, requests

    async def test_short_search_issues_no_request(self, recorder):
        client, requests = recorder
        assert await client.search.search("a") is None
        assert requests == []

    async def test_two_character_search_issues_request(self, recorder):
        client, requests = recorder
        await client.search.search("ab")
        assert len(requests) == 1
        assert requests[0].url.params["q"] == "ab"

    async def test_search_is_cached_for_thirty_seconds(self, recorder, clock):
        client, requests = recorder
        await client.search.search("python")
        clock.advance(29)
        await client.search.search("python")
        assert len(requests) == 1
        clock.advance(1)
        await client.search.search("python")
        assert len(requests) == 2

    async def test_empty_ids_are_not_fetched(self, recorder):
        client, requests = recorder
        assert await client.classrooms.get("") is None
        assert await client.posts.get(None) is None
        assert await client.profile.user("") is None
        assert await client.chat.messages("") is None
        assert requests == []

    async def test_classroom_list_degrades_to_empty(self, clock):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"success": False, "error": "boom", "code": "INTERNAL_ERROR"})

        client = OpenClassClient(mock_api(handler), queries=QueryClient(clock=clock))
        assert await client.classrooms.list() == []
        # One retry before giving up
        assert len(calls) == 2

    async def test_other_reads_propagate_failures(self, clock):
        def handler(request):
            return httpx.Response(404, json={"success": False, "error": "Post not found", "code": "NOT_FOUND_ERROR"})

        client = OpenClassClient(mock_api(handler), queries=QueryClient(clock=clock))
        with pytest.raises(ApiError) as info:
            await client.posts.get("missing")
        assert info.value.kind is ErrorKind.NOT_FOUND

    async def test_delete_file_encodes_public_id(self, clock):
        paths = []

        def handler(request):
            paths.append(request.url.raw_path)
            return httpx.Response(200, json={"success": True, "data": None})

        client = OpenClassClient(mock_api(handler), queries=QueryClient(clock=clock))
        await client.uploads.delete_file("openclass/abc123")
        assert paths == [b"/api/upload/openclass%2Fabc123"]
