"""
Leads API routes.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from outflo.api.deps import get_session
from outflo.services.lead_service import LeadService
from outflo.schemas.common import ListResponse, ErrorResponse
from outflo.schemas.lead import LeadProfileResponse

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get(
    "/search",
    response_model=ListResponse[List[LeadProfileResponse]],
    responses={400: {"model": ErrorResponse}}
)
async def search_leads(
    q: Optional[str] = Query(None, description="Matched against name, job title, company, location and summary"),
    session: AsyncSession = Depends(get_session)
):
    """Search leads (case-insensitive, at most 50 results)."""
    lead_service = LeadService(session)
    leads = await lead_service.search(q)
    return ListResponse(
        message="Leads fetched successfully",
        count=len(leads),
        data=[LeadProfileResponse.model_validate(lead) for lead in leads]
    )


@router.get("/get-leads", response_model=ListResponse[List[LeadProfileResponse]])
async def list_leads(session: AsyncSession = Depends(get_session)):
    """List all leads, newest first."""
    lead_service = LeadService(session)
    leads = await lead_service.list()
    return ListResponse(
        message="All leads fetched successfully",
        count=len(leads),
        data=[LeadProfileResponse.model_validate(lead) for lead in leads]
    )
