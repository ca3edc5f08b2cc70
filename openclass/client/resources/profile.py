# openclass/client/resources/profile.py
from dataclasses import dataclass
from typing import Any, Dict, Optional
import asyncio

from .base import MINUTE, Resource
from ..invalidation import MutationKind

MY_PROFILE = ("profile", "me")
MY_ACTIVITY = ("profile", "me", "activity")


@dataclass
class ProfileWithActivity:
    profile: Optional[Dict[str, Any]] = None
    activity: Optional[Dict[str, Any]] = None
    error: Optional[BaseException] = None


class ProfileResource(Resource):
    PROFILE_STALE_TIME = 5 * MINUTE
    ACTIVITY_STALE_TIME = 2 * MINUTE

    async def me(self) -> Dict[str, Any]:
        return await self.queries.fetch_query(
            MY_PROFILE,
            lambda: self.api.get("/profile/me"),
            stale_time=self.PROFILE_STALE_TIME,
        )

    async def my_activity(self) -> Dict[str, Any]:
        return await self.queries.fetch_query(
            MY_ACTIVITY,
            lambda: self.api.get("/profile/me/activity"),
            stale_time=self.ACTIVITY_STALE_TIME,
        )

    async def user(self, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return await self.queries.fetch_query(
            ("profile", "user", user_id),
            lambda: self.api.get(f"/profile/user/{user_id}"),
            stale_time=self.PROFILE_STALE_TIME,
            enabled=bool(user_id),
        )

    async def user_stats(self, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return await self.queries.fetch_query(
            ("profile", "user", user_id, "stats"),
            lambda: self.api.get(f"/profile/user/{user_id}/stats"),
            stale_time=self.PROFILE_STALE_TIME,
            enabled=bool(user_id),
        )

    async def with_activity(self) -> ProfileWithActivity:
        """Profile and activity loaded together; the first failure is reported in ``error``."""
        profile, activity = await asyncio.gather(self.me(), self.my_activity(), return_exceptions=True)
        result = ProfileWithActivity()
        for name, value in (("profile", profile), ("activity", activity)):
            if isinstance(value, BaseException):
                result.error = result.error or value
            else:
                setattr(result, name, (value or {}).get("data"))
        return result

    async def update(self, **changes) -> Dict[str, Any]:
        """Update the caller's profile; fields use wire names (``avatarUrl``)."""
        return await self.mutations.run(
            MutationKind.UPDATE_PROFILE,
            lambda: self.api.put("/profile/me", json=changes),
            success_message="Profile updated",
            error_message="Failed to update profile",
            on_success=lambda envelope: self.queries.set_query_data(MY_PROFILE, envelope),
        )

    async def toggle_post_like(self, post_id: str) -> Dict[str, Any]:
        return await self.mutations.run(
            MutationKind.LIKE_POST,
            lambda: self.api.post(f"/profile/post/{post_id}/like"),
            error_message="Failed to update like",
            post_id=post_id,
        )
