"""
Lead service - read and search over harvested lead profiles.
"""
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from outflo.core.exceptions import raise_validation_error
from outflo.repositories.lead_repo import LeadProfileRepository
from outflo.models.lead import LeadProfile


class LeadService:
    """Service for lead profile operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.lead_repo = LeadProfileRepository(session)

    async def search(self, query: Optional[str]) -> List[LeadProfile]:
        """Search name, job title, company, location and summary (max 50 hits)."""
        if query is None or not query.strip():
            raise_validation_error("Search query parameter 'q' is required", field="q")
        return await self.lead_repo.search(query.strip())

    async def list(self) -> List[LeadProfile]:
        """All lead profiles, newest first."""
        return await self.lead_repo.list_newest_first()
