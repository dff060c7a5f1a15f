"""
Lead ingestion job.

Fetches one page of LinkedIn people-search results and stores the profiles
that are not in the database yet.

Usage:
    python -m outflo.ingest "lead generation agency"
    python -m outflo.ingest "growth marketing" --page 2
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from outflo.config import Settings, get_settings
from outflo.context import AppContext
from outflo.core.logging_config import configure_logging
from outflo.database import init_db
from outflo.services.ingestion_service import IngestionReport, LeadIngestionService
from outflo.services.integrations.linkedin import LinkedInSearchClient

logger = logging.getLogger(__name__)


async def run_ingestion(settings: Settings, search_term: str, page: int = 1) -> IngestionReport:
    # No message generator: the job runs without provider credentials
    context = AppContext.build(settings, with_generator=False)
    client = LinkedInSearchClient(settings.LINKEDIN_COOKIES, settings.LINKEDIN_CSRF_TOKEN)
    try:
        await init_db(context.engine)
        service = LeadIngestionService(context.session_factory, client)
        return await service.run(search_term, page)
    finally:
        await client.close()
        await context.dispose()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Harvest one page of LinkedIn people-search results into the lead store"
    )
    parser.add_argument("search_term", help="Keywords to search people for")
    parser.add_argument("--page", type=int, default=1, help="Result page to fetch (10 results per page)")
    args = parser.parse_args(argv)
    if args.page < 1:
        parser.error("--page must be 1 or greater")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if not settings.LINKEDIN_COOKIES:
        logger.error("LINKEDIN_COOKIES is not set")
        return 1

    report = asyncio.run(run_ingestion(settings, args.search_term, args.page))
    if report.aborted:
        logger.warning(f"Run aborted: {report.aborted}")
    logger.info(
        f"'{report.search_term}' page {report.page}: fetched={report.fetched} "
        f"inserted={report.inserted} existing={report.existing} "
        f"failed={report.failed} skipped={report.skipped}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
