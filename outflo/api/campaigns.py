"""
Campaigns API routes.
"""
import uuid
from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from outflo.api.deps import get_session
from outflo.services.campaign_service import CampaignService
from outflo.schemas.campaign import CampaignCreate, CampaignUpdate, CampaignResponse
from outflo.schemas.common import ApiResponse, ErrorResponse

router = APIRouter(prefix="/campaigns", tags=["campaigns"])

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/get-campaign", response_model=ApiResponse[List[CampaignResponse]])
async def list_campaigns(session: AsyncSession = Depends(get_session)):
    """List campaigns that are not deleted."""
    campaign_service = CampaignService(session)
    campaigns = await campaign_service.list()
    return ApiResponse(
        message="Campaigns fetched successfully",
        data=[CampaignResponse.model_validate(c) for c in campaigns]
    )


@router.get("/get-campaign/{campaign_id}", response_model=ApiResponse[CampaignResponse], responses=NOT_FOUND)
async def get_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Get a campaign by ID."""
    campaign_service = CampaignService(session)
    campaign = await campaign_service.get(campaign_id)
    return ApiResponse(
        message="Campaign fetched successfully",
        data=CampaignResponse.model_validate(campaign)
    )


@router.post(
    "/add-campaign",
    response_model=ApiResponse[CampaignResponse],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}}
)
async def create_campaign(
    campaign_data: CampaignCreate,
    session: AsyncSession = Depends(get_session)
):
    """Create a new campaign."""
    campaign_service = CampaignService(session)
    campaign = await campaign_service.create(campaign_data)
    return ApiResponse(
        message="Campaign created successfully",
        data=CampaignResponse.model_validate(campaign)
    )


@router.put(
    "/update-campaign/{campaign_id}",
    response_model=ApiResponse[CampaignResponse],
    responses={**NOT_FOUND, 409: {"model": ErrorResponse}}
)
async def update_campaign(
    campaign_id: uuid.UUID,
    campaign_data: CampaignUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Update a campaign."""
    campaign_service = CampaignService(session)
    campaign = await campaign_service.update(campaign_id, campaign_data)
    return ApiResponse(
        message="Campaign updated successfully",
        data=CampaignResponse.model_validate(campaign)
    )


@router.delete("/delete-campaign/{campaign_id}", response_model=ApiResponse[CampaignResponse], responses=NOT_FOUND)
async def delete_campaign(
    campaign_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Soft-delete a campaign."""
    campaign_service = CampaignService(session)
    campaign = await campaign_service.delete(campaign_id)
    return ApiResponse(
        message="Campaign deleted successfully",
        data=CampaignResponse.model_validate(campaign)
    )
