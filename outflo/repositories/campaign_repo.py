"""
Campaign repository.
"""
import uuid
from typing import Optional, List
from datetime import datetime, timezone

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from outflo.models.campaign import Campaign, CampaignStatus
from outflo.repositories.base import BaseRepository


class CampaignRepository(BaseRepository[Campaign]):
    """Repository for Campaign operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Campaign, session)

    async def list_visible(self) -> List[Campaign]:
        """All campaigns that are not soft-deleted, in creation order."""
        query = (
            select(Campaign)
            .where(Campaign.status != CampaignStatus.DELETED)
            .order_by(Campaign.created_at)
        )
        result = await self.session.exec(query)
        return result.all()

    async def get_visible(self, campaign_id: uuid.UUID) -> Optional[Campaign]:
        """Get a campaign unless it is missing or soft-deleted."""
        campaign = await self.get(campaign_id)
        if not campaign or not CampaignStatus(campaign.status).is_visible:
            return None
        return campaign

    async def find_live_by_name(
        self,
        name: str,
        exclude_id: Optional[uuid.UUID] = None
    ) -> Optional[Campaign]:
        """Find a non-deleted campaign with this exact name."""
        query = select(Campaign).where(
            Campaign.name == name,
            Campaign.status != CampaignStatus.DELETED
        )
        if exclude_id:
            query = query.where(Campaign.id != exclude_id)
        result = await self.session.exec(query)
        return result.first()

    async def update_status(self, campaign_id: uuid.UUID, status: CampaignStatus) -> Optional[Campaign]:
        """Set the status only; every other field is left untouched."""
        campaign = await self.get(campaign_id)
        if not campaign:
            return None

        campaign.status = status
        campaign.updated_at = datetime.now(timezone.utc)

        self.session.add(campaign)
        await self.session.commit()
        await self.session.refresh(campaign)
        return campaign
