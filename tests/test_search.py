"""Tests for search scoring and the search endpoint."""

from openclass.services.search_service import score, tokenize

from .helpers import auth


class TestScoring:
    """Title matches outrank tag matches, which outrank body matches."""

    def test_tokenize(self):
        assert tokenize("  JavaScript  Scope ") == ["javascript", "scope"]

    def test_weights(self):
        terms = ["scope"]
        title = score(terms, "Scope rules", "", [])
        tag = score(terms, "", "", ["scope"])
        body = score(terms, "", "about scope", [])
        assert title > tag > body > 0

    def test_full_match_is_one(self):
        assert score(["js"], "js", "js", ["js"]) == 1.0

    def test_no_terms(self):
        assert score([], "anything", "", []) == 0.0


class TestSearchEndpoint:
    async def _seed(self, http, user_id):
        await http.post(
            "/api/classrooms",
            json={"name": "Python Basics", "category": "Programming", "description": "Intro course"},
            headers=auth(user_id),
        )
        await http.post(
            "/api/posts",
            json={"title": "Closures", "content": "A python closure example", "tags": ["functions"]},
            headers=auth(user_id),
        )

    async def test_results_ranked_by_relevance(self, http, alice):
        await self._seed(http, alice)
        body = (await http.get("/api/search", params={"q": "python"})).json()["data"]

        assert body["query"] == "python"
        assert body["type"] == "all"
        assert body["total"] == 2
        # Title match beats body match
        assert [r["type"] for r in body["results"]] == ["CLASSROOM", "POST"]
        assert body["results"][0]["url"].startswith("/classroom/")

    async def test_type_filter(self, http, alice):
        await self._seed(http, alice)
        body = (await http.get("/api/search", params={"q": "python", "type": "posts"})).json()["data"]
        assert [r["type"] for r in body["results"]] == ["POST"]

    async def test_short_query_is_rejected(self, http):
        response = await http.get("/api/search", params={"q": "a"})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_unknown_type_is_rejected(self, http):
        response = await http.get("/api/search", params={"q": "python", "type": "people"})
        assert response.status_code == 400
