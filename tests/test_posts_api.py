"""End-to-end tests for posts and likes."""

import pytest
from sqlalchemy import select

from openclass.models.post import Post as PostModel
from openclass.schemas import ApiResponse, Post
from openclass.services.like_service import LikeService

from .helpers import auth


@pytest.fixture
async def post(http, alice):
    response = await http.post(
        "/api/posts",
        json={"title": "Closures", "content": "Functions remember scope", "tags": ["JavaScript", "scope"]},
        headers=auth(alice),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestPosts:
    async def test_create_post(self, post, alice):
        assert post["title"] == "Closures"
        assert post["tags"] == ["JavaScript", "scope"]
        assert post["authorId"] == alice
        assert post["likesCount"] == 0

    async def test_list_and_get(self, http, post):
        body = (await http.get("/api/posts")).json()
        assert [p["id"] for p in body["data"]] == [post["id"]]
        assert body["pagination"]["total"] == 1

        detail = ApiResponse[Post].model_validate((await http.get(f"/api/posts/{post['id']}")).json())
        assert detail.data.title == "Closures"
        assert detail.data.tags == ["JavaScript", "scope"]

    async def test_filter_by_classroom(self, http, alice, post):
        classroom = (await http.post(
            "/api/classrooms",
            json={"name": "JS", "category": "Programming"},
            headers=auth(alice),
        )).json()["data"]
        await http.post(
            "/api/posts",
            json={"title": "In class", "classroomId": classroom["id"]},
            headers=auth(alice),
        )

        body = (await http.get("/api/posts", params={"classroomId": classroom["id"]})).json()
        assert [p["title"] for p in body["data"]] == ["In class"]

    async def test_unknown_classroom_is_rejected(self, http, alice):
        response = await http.post(
            "/api/posts",
            json={"title": "Orphan", "classroomId": "missing"},
            headers=auth(alice),
        )
        assert response.status_code == 404

    async def test_invalid_type_is_validation_error(self, http, alice):
        response = await http.post("/api/posts", json={"title": "T", "type": "podcast"}, headers=auth(alice))
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "type"


class TestLikes:
    """Liking toggles."""

    async def test_like_twice_toggles(self, http, post, bob):
        first = await http.post(f"/api/posts/{post['id']}/like", headers=auth(bob))
        assert first.status_code == 200
        assert first.json()["data"] == {"liked": True, "likesCount": 1}

        second = await http.post(f"/api/posts/{post['id']}/like", headers=auth(bob))
        assert second.json()["data"] == {"liked": False, "likesCount": 0}

    async def test_likes_from_different_users_add_up(self, http, post, alice, bob):
        await http.post(f"/api/posts/{post['id']}/like", headers=auth(alice))
        response = await http.post(f"/api/profile/post/{post['id']}/like", headers=auth(bob))
        assert response.json()["data"] == {"liked": True, "likesCount": 2}

        detail = (await http.get(f"/api/posts/{post['id']}")).json()
        assert detail["data"]["likesCount"] == 2

    async def test_like_missing_post(self, http, bob):
        response = await http.post("/api/posts/missing/like", headers=auth(bob))
        assert response.status_code == 404

    async def test_classroom_like_toggles(self, http, alice, bob):
        classroom = (await http.post(
            "/api/classrooms", json={"name": "JS", "category": "Programming"}, headers=auth(alice)
        )).json()["data"]

        first = await http.post(f"/api/profile/classroom/{classroom['id']}/like", headers=auth(bob))
        assert first.json()["data"] == {"liked": True, "likesCount": 1}
        second = await http.post(f"/api/profile/classroom/{classroom['id']}/like", headers=auth(bob))
        assert second.json()["data"] == {"liked": False, "likesCount": 0}


class CompetingSession:
    """Session wrapper that lets another request commit right after the first query."""

    def __init__(self, session, competitor):
        self._session = session
        self._competitor = competitor
        self._done = False

    def __getattr__(self, name):
        return getattr(self._session, name)

    async def execute(self, *args, **kwargs):
        result = await self._session.execute(*args, **kwargs)
        if not self._done:
            self._done = True
            await self._competitor()
        return result


class TestConcurrentUnlike:
    async def test_count_moves_once(self, app, http, post, bob):
        await http.post(f"/api/posts/{post['id']}/like", headers=auth(bob))

        async with app.state.db.session_factory() as first, app.state.db.session_factory() as second:
            async def competing_unlike():
                result = await LikeService(second).toggle_post_like(bob, post["id"])
                assert result.liked is False

            result = await LikeService(CompetingSession(first, competing_unlike)).toggle_post_like(bob, post["id"])

        assert result.liked is False
        async with app.state.db.session_factory() as session:
            likes_count = (await session.execute(
                select(PostModel.likes_count).where(PostModel.id == post["id"])
            )).scalar_one()
        assert likes_count == 0
