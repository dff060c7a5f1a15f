"""
Lead profile model - people harvested from LinkedIn search.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class LeadProfile(SQLModel, table=True):
    """
    LeadProfile entity - read-only from the API, written by the ingestion job.
    external_id is the LinkedIn member id and is unique per row.
    """
    __tablename__ = "lead_profile"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    external_id: str = Field(index=True, unique=True)

    name: str = Field(default="", index=True)
    handle: str = ""
    job_title: str = ""
    company: str = Field(default="", index=True)
    location: str = ""
    profile_url: str = ""
    summary: str = ""
    image_url: str = ""

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        index=True,
    )
