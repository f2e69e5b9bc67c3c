import asyncio
import json
import os

import httpx
import pytest
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DB_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SESSION_JWT_SECRET", "test-secret")
os.environ.setdefault("REGISTRY_URL", "https://registry.test")

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

async_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
AsyncSessionLocal = sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)

_RealAsyncClient = httpx.AsyncClient


async def override_get_session():
    async with AsyncSessionLocal() as session:
        yield session


async def _create_tables():
    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def _drop_tables():
    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)


class FakeRegistry:
    """Canned registry replies keyed by (method, path); records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def reply(self, method, path, status_code=200, json=None, text=None):
        self.routes[(method, path)] = (status_code, json, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))
        status_code, payload, text = self.routes.get(
            (request.method, request.url.path),
            (404, {"error": "Not found"}, None),
        )
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=payload)

    def client(self, **kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(self.handler), **kwargs)

    def paths(self):
        return [(method, path) for method, path, _ in self.calls]


@pytest.fixture(scope="module", autouse=True)
def setup_database():
    from orgteams.main import app
    from orgteams.db.database import get_session

    app.dependency_overrides[get_session] = override_get_session
    asyncio.run(_create_tables())
    yield
    asyncio.run(_drop_tables())
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def fake_registry(monkeypatch):
    registry = FakeRegistry()
    monkeypatch.setattr("orgteams.services.registry.httpx.AsyncClient", registry.client)
    return registry


@pytest.fixture
def logged_in_as():
    from orgteams.main import app
    from orgteams.auth.dependencies import Features, get_current_user, get_features
    from orgteams.models import LoggedInUser

    def _login(name="alice", org_billing=True):
        app.dependency_overrides[get_current_user] = lambda: LoggedInUser(name=name)
        app.dependency_overrides[get_features] = lambda: Features(org_billing=org_billing)

    _login()
    yield _login
    app.dependency_overrides.pop(get_current_user, None)
    app.dependency_overrides.pop(get_features, None)


def pop_notice_messages(token):
    from orgteams.services.notices import pop_notices

    async def _pop():
        async with AsyncSessionLocal() as session:
            return await pop_notices(session, token)

    return [notice.message for notice in asyncio.run(_pop())]


def notice_token(location):
    assert "?notice=" in location
    return location.split("?notice=", 1)[1]
