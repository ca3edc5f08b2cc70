"""End-to-end tests for the classroom endpoints."""

import pytest

from openclass.schemas import Classroom, PaginatedResponse

from .helpers import auth

NEW_CLASSROOM = {"name": "X", "category": "Programming", "level": "beginner"}


async def create_classroom(http, user_id, **overrides):
    response = await http.post("/api/classrooms", json={**NEW_CLASSROOM, **overrides}, headers=auth(user_id))
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateAndList:
    """Creating a classroom makes it visible in the list."""

    async def test_created_classroom_is_listed(self, http, alice):
        created = await create_classroom(http, alice)
        assert created["id"]
        assert created["ownerId"] == alice
        assert created["memberCount"] == 1

        response = await http.get("/api/classrooms")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "X" in [c["name"] for c in body["data"]]
        assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "totalPages": 1}

        page = PaginatedResponse[Classroom].model_validate(body)
        assert page.data[0].owner.id == alice
        assert page.pagination.total_pages == 1

    async def test_level_is_case_insensitive(self, http, alice):
        created = await create_classroom(http, alice, level="ADVANCED")
        assert created["level"] == "advanced"

    async def test_private_classrooms_are_not_listed(self, http, alice):
        await create_classroom(http, alice, name="Hidden", isPublic=False)
        body = (await http.get("/api/classrooms")).json()
        assert body["data"] == []

    async def test_filters_and_pagination(self, http, alice):
        await create_classroom(http, alice, name="A", category="Design")
        await create_classroom(http, alice, name="B", category="Programming")
        await create_classroom(http, alice, name="C", category="Programming", level="advanced")

        body = (await http.get("/api/classrooms", params={"category": "Programming"})).json()
        assert sorted(c["name"] for c in body["data"]) == ["B", "C"]

        body = (await http.get("/api/classrooms", params={"level": "advanced"})).json()
        assert [c["name"] for c in body["data"]] == ["C"]

        body = (await http.get("/api/classrooms", params={"limit": 2, "page": 2})).json()
        assert len(body["data"]) == 1
        assert body["pagination"]["totalPages"] == 2

    async def test_create_requires_identity(self, http):
        response = await http.post("/api/classrooms", json=NEW_CLASSROOM)
        assert response.status_code == 401
        assert response.json()["code"] == "AUTHENTICATION_ERROR"

    async def test_unknown_user_is_rejected(self, http):
        response = await http.post("/api/classrooms", json=NEW_CLASSROOM, headers=auth("ghost"))
        assert response.status_code == 401


class TestDetail:
    async def test_get_classroom(self, http, alice):
        created = await create_classroom(http, alice)
        body = (await http.get(f"/api/classrooms/{created['id']}")).json()
        assert body["data"]["name"] == "X"
        assert body["data"]["owner"]["id"] == alice

    async def test_missing_classroom(self, http):
        response = await http.get("/api/classrooms/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "Classroom not found with id: nope"


class TestMembership:
    """Join and leave rules."""

    @pytest.fixture
    async def classroom(self, http, alice):
        return await create_classroom(http, alice)

    async def test_join_then_leave(self, http, classroom, bob):
        joined = await http.post(f"/api/classrooms/{classroom['id']}/join", headers=auth(bob))
        assert joined.status_code == 200
        assert joined.json()["data"] == {"classroomId": classroom["id"], "userId": bob, "role": "member", "joined": True}

        detail = (await http.get(f"/api/classrooms/{classroom['id']}")).json()
        assert detail["data"]["memberCount"] == 2

        left = await http.post(f"/api/classrooms/{classroom['id']}/leave", headers=auth(bob))
        assert left.status_code == 200
        assert left.json()["data"]["joined"] is False

    async def test_join_twice_conflicts(self, http, classroom, bob):
        await http.post(f"/api/classrooms/{classroom['id']}/join", headers=auth(bob))
        response = await http.post(f"/api/classrooms/{classroom['id']}/join", headers=auth(bob))
        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT_ERROR"

    async def test_leave_without_membership(self, http, classroom, bob):
        response = await http.post(f"/api/classrooms/{classroom['id']}/leave", headers=auth(bob))
        assert response.status_code == 404

    async def test_owner_cannot_leave(self, http, classroom, alice):
        response = await http.post(f"/api/classrooms/{classroom['id']}/leave", headers=auth(alice))
        assert response.status_code == 403
        assert response.json()["code"] == "AUTHORIZATION_ERROR"

    async def test_join_missing_classroom(self, http, bob):
        response = await http.post("/api/classrooms/nope/join", headers=auth(bob))
        assert response.status_code == 404
