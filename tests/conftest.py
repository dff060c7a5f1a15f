"""
Shared fixtures.

Every test gets its own SQLite database file, an app built with create_app()
and a fake message generator, so nothing leaves the process.
"""
from typing import List

import httpx
import pytest

from outflo.config import Settings
from outflo.core.exceptions import ExternalServiceError
from outflo.database import init_db
from outflo.main import create_app
from outflo.schemas.message import MessageRequest


class FakeMessageGenerator:
    """Stands in for MessageGenerator; records requests."""

    def __init__(self, text: str = "Hi there, let's talk about OutFlo.", fail: bool = False):
        self.text = text
        self.fail = fail
        self.requests: List[MessageRequest] = []

    async def generate(self, request: MessageRequest) -> str:
        self.requests.append(request)
        if self.fail:
            raise ExternalServiceError("gemini", "Failed to generate personalized message", error="quota")
        return self.text


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'outflo.db'}",
        GEMINI_API_KEY="test-key",
        LINKEDIN_COOKIES="li_at=test",
        LINKEDIN_CSRF_TOKEN="ajax:123",
    )


@pytest.fixture
def generator() -> FakeMessageGenerator:
    return FakeMessageGenerator()


@pytest.fixture
async def app(settings, generator):
    app = create_app(settings, message_generator=generator)
    await init_db(app.state.context.engine)
    yield app
    await app.state.context.dispose()


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def session_factory(app):
    return app.state.context.session_factory


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session

