"""
Lead profile repository with search and insert-if-absent.
"""
from typing import List, Tuple

from sqlmodel import select, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from outflo.models.lead import LeadProfile
from outflo.repositories.base import BaseRepository

SEARCH_LIMIT = 50


class LeadProfileRepository(BaseRepository[LeadProfile]):
    """Repository for LeadProfile operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(LeadProfile, session)

    async def search(self, term: str, limit: int = SEARCH_LIMIT) -> List[LeadProfile]:
        """Case-insensitive substring search across the descriptive text fields."""
        query = select(LeadProfile).where(
            or_(
                LeadProfile.name.icontains(term, autoescape=True),
                LeadProfile.job_title.icontains(term, autoescape=True),
                LeadProfile.company.icontains(term, autoescape=True),
                LeadProfile.location.icontains(term, autoescape=True),
                LeadProfile.summary.icontains(term, autoescape=True)
            )
        ).limit(limit)
        result = await self.session.exec(query)
        return result.all()

    async def list_newest_first(self) -> List[LeadProfile]:
        """Every lead profile, most recently inserted first."""
        return await self.list(order_by="created_at", order_desc=True)

    async def insert_if_absent(self, data: dict) -> Tuple[LeadProfile, bool]:
        """
        Insert a profile unless one with the same external_id exists.
        Existing rows are returned untouched.

        Returns:
            (profile, created)
        """
        existing = await self.get_by_field("external_id", data["external_id"])
        if existing:
            return existing, False

        try:
            profile = await self.create(data)
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return profile, True
