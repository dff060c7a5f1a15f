"""
Tests for the lead ingestion job against a mocked LinkedIn endpoint.
"""
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from outflo.ingest import parse_args, run_ingestion
from outflo.models.lead import LeadProfile
from outflo.repositories.lead_repo import LeadProfileRepository
from outflo.services.ingestion_service import LeadIngestionService
from outflo.services.integrations.linkedin import LinkedInSearchClient
from factories import search_item, search_payload


def make_service(session_factory, handler) -> LeadIngestionService:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = LinkedInSearchClient("li_at=test", "ajax:123", client=http)
    return LeadIngestionService(session_factory, client)


def respond_with(payload: dict, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)
    return handler


async def stored_profiles(session_factory):
    async with session_factory() as session:
        result = await session.exec(select(LeadProfile))
        return result.all()


class TestIngestionRun:

    @pytest.mark.asyncio
    async def test_headless_item_is_not_stored(self, session_factory):
        payload = search_payload(search_item("ACoA1"), search_item("headless"))
        service = make_service(session_factory, respond_with(payload))

        report = await service.run("lead generation agency")

        profiles = await stored_profiles(session_factory)
        assert [p.external_id for p in profiles] == ["ACoA1"]
        assert report.fetched == 1
        assert report.inserted == 1
        assert report.skipped == 1
        assert report.aborted is None

    @pytest.mark.asyncio
    async def test_stored_fields(self, session_factory):
        service = make_service(session_factory, respond_with(search_payload(search_item("ACoA1"))))

        await service.run("growth")

        profile = (await stored_profiles(session_factory))[0]
        assert profile.name == "Jane Doe"
        assert profile.handle == "janedoe"
        assert profile.job_title == "Head of Growth at Acme"
        assert profile.company == "Rocket Labs"
        assert profile.profile_url == "https://www.linkedin.com/in/janedoe"
        assert profile.image_url == "200_200/profile-photo.jpg"

    @pytest.mark.asyncio
    async def test_existing_profiles_are_not_overwritten(self, session_factory):
        async with session_factory() as session:
            session.add(LeadProfile(external_id="ACoA1", name="Original Name"))
            await session.commit()
        payload = search_payload(search_item("ACoA1", name="New Name"), search_item("ACoA2"))
        service = make_service(session_factory, respond_with(payload))

        report = await service.run("growth")

        profiles = {p.external_id: p for p in await stored_profiles(session_factory)}
        assert profiles["ACoA1"].name == "Original Name"
        assert "ACoA2" in profiles
        assert report.inserted == 1
        assert report.existing == 1

    @pytest.mark.asyncio
    async def test_rerun_inserts_nothing(self, session_factory):
        payload = search_payload(search_item("ACoA1"), search_item("ACoA2"))

        await make_service(session_factory, respond_with(payload)).run("growth")
        report = await make_service(session_factory, respond_with(payload)).run("growth")

        assert report.inserted == 0
        assert report.existing == 2
        assert len(await stored_profiles(session_factory)) == 2

    @pytest.mark.asyncio
    async def test_http_rate_limit_aborts_run(self, session_factory):
        service = make_service(session_factory, respond_with({}, status_code=429))

        report = await service.run("growth")

        assert report.aborted == "LinkedIn rate limit exceeded"
        assert report.inserted == 0
        assert await stored_profiles(session_factory) == []

    @pytest.mark.asyncio
    async def test_rate_limit_in_body_aborts_run(self, session_factory):
        payload = {"status": 429, "included": [search_item("ACoA1")]}
        service = make_service(session_factory, respond_with(payload))

        report = await service.run("growth")

        assert report.aborted is not None
        assert await stored_profiles(session_factory) == []

    @pytest.mark.asyncio
    async def test_network_failure_yields_empty_result(self, session_factory):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        report = await make_service(session_factory, handler).run("growth")

        assert report.aborted is None
        assert report.fetched == 0
        assert report.inserted == 0

    @pytest.mark.asyncio
    async def test_server_error_yields_empty_result(self, session_factory):
        service = make_service(session_factory, respond_with({"message": "boom"}, status_code=500))

        report = await service.run("growth")

        assert report.fetched == 0
        assert await stored_profiles(session_factory) == []

    @pytest.mark.asyncio
    async def test_request_carries_credentials_and_offset(self, session_factory):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=search_payload())

        await make_service(session_factory, handler).run("growth", page=2)

        request = seen[0]
        assert request.headers["cookie"] == "li_at=test"
        assert request.headers["csrf-token"] == "ajax:123"
        assert "start:10," in str(request.url)

    @pytest.mark.asyncio
    async def test_ingested_leads_are_searchable(self, session_factory, client):
        service = make_service(session_factory, respond_with(search_payload(search_item("ACoA1"))))
        await service.run("growth")

        response = await client.get("/api/v1/leads/search", params={"q": "rocket"})

        assert [p["profileId"] for p in response.json()["data"]] == ["ACoA1"]


    @pytest.mark.asyncio
    async def test_unique_index_catches_a_missed_duplicate(self, session_factory, monkeypatch):
        async with session_factory() as session:
            session.add(LeadProfile(external_id="ACoA1", name="Original Name"))
            await session.commit()

        async def lookup_misses(self, field, value):
            return None

        monkeypatch.setattr(LeadProfileRepository, "get_by_field", lookup_misses)
        payload = search_payload(search_item("ACoA1", name="New Name"), search_item("ACoA2"))
        service = make_service(session_factory, respond_with(payload))

        report = await service.run("growth")

        profiles = {p.external_id: p for p in await stored_profiles(session_factory)}
        assert profiles["ACoA1"].name == "Original Name"
        assert profiles["ACoA2"].name == "Jane Doe"
        assert report.existing == 1
        assert report.inserted == 1
        assert report.failed == 0

    @pytest.mark.asyncio
    async def test_write_error_is_counted_and_batch_continues(self, session_factory, monkeypatch):
        create = LeadProfileRepository.create

        async def flaky_create(self, obj_in):
            if obj_in["external_id"] == "ACoA1":
                raise OperationalError("INSERT", {}, Exception("disk I/O error"))
            return await create(self, obj_in)

        monkeypatch.setattr(LeadProfileRepository, "create", flaky_create)
        payload = search_payload(search_item("ACoA1"), search_item("ACoA2"))
        service = make_service(session_factory, respond_with(payload))

        report = await service.run("growth")

        assert [p.external_id for p in await stored_profiles(session_factory)] == ["ACoA2"]
        assert report.failed == 1
        assert report.inserted == 1
        assert report.existing == 0

    @pytest.mark.asyncio
    async def test_inserted_profile_gets_a_creation_time(self, session_factory):
        before = datetime.now(timezone.utc)
        service = make_service(session_factory, respond_with(search_payload(search_item("ACoA1"))))

        await service.run("growth")

        created_at = (await stored_profiles(session_factory))[0].created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        assert before - timedelta(minutes=1) <= created_at <= datetime.now(timezone.utc) + timedelta(minutes=1)


class TestRunIngestion:

    @pytest.mark.asyncio
    async def test_runs_without_generation_credentials(self, settings, session_factory, monkeypatch):
        def client_factory(cookies, csrf_token):
            http = httpx.AsyncClient(transport=httpx.MockTransport(respond_with(search_payload(search_item("ACoA1")))))
            return LinkedInSearchClient(cookies, csrf_token, client=http)

        monkeypatch.setattr("outflo.ingest.LinkedInSearchClient", client_factory)
        job_settings = settings.model_copy(update={"GEMINI_API_KEY": "", "OPENAI_API_KEY": ""})

        report = await run_ingestion(job_settings, "growth")

        assert report.inserted == 1
        assert [p.external_id for p in await stored_profiles(session_factory)] == ["ACoA1"]


class TestIngestArgs:

    def test_defaults_to_first_page(self):
        args = parse_args(["lead generation agency"])

        assert args.search_term == "lead generation agency"
        assert args.page == 1

    def test_page_must_be_positive(self):
        with pytest.raises(SystemExit):
            parse_args(["growth", "--page", "0"])
