"""Shared fixtures: an app on a throwaway SQLite file and clients against it."""

import pytest
from httpx import ASGITransport, AsyncClient

from openclass.client import ApiClient, OpenClassClient, QueryClient
from openclass.core.config import Settings
from openclass.main import create_app
from openclass.models.user import User

from .helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        redis_url=None,
        environment="test",
        upload_dir=str(tmp_path / "uploads"),
        max_upload_size=1024,
        rate_limit_per_minute=1000,
    )


@pytest.fixture
async def app(settings):
    # ASGITransport does not run the lifespan, so set up tables here
    app = create_app(settings)
    await app.state.db.create_all()
    yield app
    await app.state.db.dispose()


@pytest.fixture
async def http(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def make_user(app):
    async def _make(name: str = "Alice", **fields) -> str:
        async with app.state.db.session_factory() as session:
            user = User(email=f"{name.lower()}@example.com", name=name, **fields)
            session.add(user)
            await session.commit()
            return user.id
    return _make


@pytest.fixture
async def alice(make_user):
    return await make_user("Alice")


@pytest.fixture
async def bob(make_user):
    return await make_user("Bob")


@pytest.fixture
async def client_for(app, clock):
    """Build an OpenClassClient talking to the app in-process as the given user."""
    clients = []

    def _build(user_id: str = None) -> OpenClassClient:
        api = ApiClient(
            base_url="http://test/api",
            user_id=user_id,
            transport=ASGITransport(app=app),
        )
        client = OpenClassClient(api, queries=QueryClient(clock=clock))
        clients.append(client)
        return client

    yield _build
    for client in clients:
        await client.aclose()
