"""
Lead ingestion - one page of LinkedIn search results into the lead store.
"""
import logging
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from outflo.core.exceptions import RateLimitError
from outflo.repositories.lead_repo import LeadProfileRepository
from outflo.services.integrations.linkedin import (
    LinkedInSearchClient,
    ParsedProfile,
    SearchParseResult,
    parse_search_results,
)

logger = logging.getLogger(__name__)


class IngestionReport(BaseModel):
    search_term: str
    page: int
    fetched: int = 0
    inserted: int = 0
    existing: int = 0
    failed: int = 0
    skipped: int = 0
    aborted: Optional[str] = None


class LeadIngestionService:
    """Fetches one search page, parses it and inserts profiles not yet stored."""

    def __init__(self, session_factory: async_sessionmaker, client: LinkedInSearchClient):
        self.session_factory = session_factory
        self.client = client

    async def scrape(self, search_term: str, page: int = 1) -> SearchParseResult:
        """
        Fetch and parse one page. A rate limit is re-raised so the run can
        abort; any other failure is logged and yields an empty result.
        """
        try:
            payload = await self.client.search_people(search_term, page)
        except RateLimitError as e:
            logger.warning(f"Aborting scrape for '{search_term}' page {page}: {e.message}")
            raise
        except Exception as e:
            logger.error(f"Scraping failed for '{search_term}' page {page}: {e}")
            return SearchParseResult()

        try:
            result = parse_search_results(payload)
        except Exception as e:
            logger.error(f"Could not parse search results for '{search_term}': {e}")
            return SearchParseResult()

        for item in result.skipped:
            logger.debug(f"Skipped result #{item.index}: {item.reason}")
        for profile in result.profiles:
            if profile.missing:
                logger.info(f"Profile {profile.external_id} has no {', '.join(profile.missing)}")

        return result

    async def save(self, profiles: List[ParsedProfile], report: IngestionReport) -> IngestionReport:
        """Insert each profile unless its external id is already stored."""
        async with self.session_factory() as session:
            lead_repo = LeadProfileRepository(session)
            for profile in profiles:
                try:
                    _, created = await lead_repo.insert_if_absent(profile.to_record())
                except IntegrityError:
                    logger.info(f"Profile {profile.external_id} already stored, skipping")
                    report.existing += 1
                    continue
                except SQLAlchemyError as e:
                    logger.error(f"Error saving profile {profile.external_id}: {e}")
                    report.failed += 1
                    continue

                if created:
                    report.inserted += 1
                else:
                    report.existing += 1

        logger.info(f"Saved {report.inserted} of {len(profiles)} profiles")
        return report

    async def run(self, search_term: str, page: int = 1) -> IngestionReport:
        report = IngestionReport(search_term=search_term, page=page)

        try:
            result = await self.scrape(search_term, page)
        except RateLimitError as e:
            report.aborted = e.message
            return report

        report.fetched = len(result.profiles)
        report.skipped = len(result.skipped)
        return await self.save(result.profiles, report)
