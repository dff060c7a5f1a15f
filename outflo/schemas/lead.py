"""
Lead profile schemas.
"""
import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class LeadProfileResponse(BaseModel):
    """Lead profile response."""
    id: uuid.UUID
    external_id: str = Field(alias="profileId")
    name: str
    handle: str
    job_title: str = Field(alias="jobTitle")
    company: str
    location: str
    profile_url: str = Field(alias="profileUrl")
    summary: str
    image_url: str = Field(alias="imageUrl")
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True
