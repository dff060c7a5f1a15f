"""
Application wiring: health, error envelopes, CORS and startup checks.
"""
import httpx
import pydantic
import pytest
from sqlalchemy.exc import OperationalError

from outflo.config import Settings
from outflo.main import create_app
from outflo.services.lead_service import LeadService


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"message": "Server is running", "status": "OK"}

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client):
        response = await client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found", "error": None}

    @pytest.mark.asyncio
    async def test_store_failure_is_a_server_error(self, client, monkeypatch):
        async def broken(self):
            raise OperationalError("SELECT", {}, Exception("database is gone"))

        monkeypatch.setattr(LeadService, "list", broken)

        response = await client.get("/api/v1/leads/get-leads")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Database operation failed"
        assert body["error"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_unexpected_error_uses_error_envelope(self, app, monkeypatch):
        async def broken(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(LeadService, "list", broken)
        # The server error middleware re-raises after responding
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/v1/leads/get-leads")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Internal server error",
            "error": "RuntimeError",
        }


class TestCors:

    @pytest.mark.asyncio
    async def test_frontend_origin_is_allowed(self, client, settings):
        response = await client.options(
            "/api/v1/campaigns/get-campaign",
            headers={"Origin": settings.FRONTEND_URL, "Access-Control-Request-Method": "GET"},
        )

        assert response.headers["access-control-allow-origin"] == settings.FRONTEND_URL

    @pytest.mark.asyncio
    async def test_other_origins_are_not_allowed(self, client):
        response = await client.get("/health", headers={"Origin": "https://evil.example"})

        assert "access-control-allow-origin" not in response.headers


class TestStartup:

    def test_database_url_is_required(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)

    def test_missing_generation_credential_is_fatal(self, tmp_path):
        settings = Settings(
            _env_file=None,
            DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'outflo.db'}",
            GEMINI_API_KEY="",
            OPENAI_API_KEY="",
        )

        with pytest.raises(RuntimeError):
            create_app(settings)

    def test_settings_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/outflo")
        monkeypatch.setenv("FRONTEND_URL", "https://app.outflo.io")
        monkeypatch.setenv("PORT", "9000")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/outflo"
        assert settings.FRONTEND_URL == "https://app.outflo.io"
        assert settings.PORT == 9000
        assert settings.API_PREFIX == "/api/v1"
