"""
Campaign service - campaign management with soft delete.
"""
import uuid
import logging
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession

from outflo.core.exceptions import raise_not_found, raise_already_exists
from outflo.repositories.campaign_repo import CampaignRepository
from outflo.models.campaign import Campaign, CampaignStatus
from outflo.schemas.campaign import CampaignCreate, CampaignUpdate

logger = logging.getLogger(__name__)


class CampaignService:
    """Service for campaign operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.campaign_repo = CampaignRepository(session)

    async def create(self, campaign_data: CampaignCreate) -> Campaign:
        """Create a new campaign; names are unique among non-deleted campaigns."""
        if await self.campaign_repo.find_live_by_name(campaign_data.name):
            logger.warning(f"Rejected duplicate campaign name '{campaign_data.name}'")
            raise_already_exists("Campaign", "name", campaign_data.name)

        data = campaign_data.model_dump(exclude_none=True)
        campaign = await self.campaign_repo.create(data)

        logger.info(f"Campaign '{campaign.name}' created ({campaign.id})")
        return campaign

    async def get(self, campaign_id: uuid.UUID) -> Campaign:
        """Get a campaign by ID. Deleted campaigns are not found."""
        campaign = await self.campaign_repo.get_visible(campaign_id)
        if not campaign:
            raise_not_found("Campaign", str(campaign_id))
        return campaign

    async def list(self) -> List[Campaign]:
        """List every campaign that is not deleted."""
        return await self.campaign_repo.list_visible()

    async def update(
        self,
        campaign_id: uuid.UUID,
        campaign_data: CampaignUpdate
    ) -> Campaign:
        """Replace the given fields of a live campaign."""
        campaign = await self.campaign_repo.get_visible(campaign_id)
        if not campaign:
            raise_not_found("Campaign", str(campaign_id))

        if await self.campaign_repo.find_live_by_name(campaign_data.name, exclude_id=campaign_id):
            logger.warning(f"Rejected rename of {campaign_id} to duplicate name '{campaign_data.name}'")
            raise_already_exists("Campaign", "name", campaign_data.name)

        update_data = campaign_data.model_dump(exclude_none=True)
        updated_campaign = await self.campaign_repo.update(campaign_id, update_data)

        logger.info(f"Campaign '{updated_campaign.name}' updated ({campaign_id})")
        return updated_campaign

    async def delete(self, campaign_id: uuid.UUID) -> Campaign:
        """Soft-delete a campaign. Already deleted campaigns are not found."""
        campaign = await self.campaign_repo.get_visible(campaign_id)
        if not campaign:
            raise_not_found("Campaign", str(campaign_id))

        campaign = await self.campaign_repo.update_status(campaign_id, CampaignStatus.DELETED)

        logger.info(f"Campaign '{campaign.name}' deleted ({campaign_id})")
        return campaign
