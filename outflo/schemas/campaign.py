"""
Campaign schemas.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from outflo.models.campaign import CampaignStatus


class CampaignWrite(BaseModel):
    """
    Fields accepted by both create and update.
    Update re-validates every field, same as create.
    """
    name: str
    description: str
    status: Optional[CampaignStatus] = None
    leads: List[str]
    account_ids: List[str] = Field(alias="accountIDs")

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v

    class Config:
        populate_by_name = True


class CampaignCreate(CampaignWrite):
    """Create a new campaign."""

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Q1 Founders Outreach",
                "description": "Reach out to SaaS founders in Berlin",
                "status": "active",
                "leads": ["https://linkedin.com/in/profile-1"],
                "accountIDs": ["123"]
            }
        }


class CampaignUpdate(CampaignWrite):
    """Update an existing campaign."""


class CampaignResponse(BaseModel):
    """Campaign response."""
    id: uuid.UUID
    name: str
    description: str
    status: CampaignStatus
    leads: List[str]
    account_ids: List[str] = Field(alias="accountIDs")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True
