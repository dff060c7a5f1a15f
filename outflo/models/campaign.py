"""
Campaign model - outreach campaign with soft-delete status.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List

from sqlmodel import SQLModel, Field
from sqlalchemy import JSON, Column, DateTime
from sqlalchemy.dialects.postgresql import JSONB


class CampaignStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"

    @property
    def is_visible(self) -> bool:
        """Whether campaigns in this status show up on read paths."""
        if self is CampaignStatus.ACTIVE:
            return True
        if self is CampaignStatus.INACTIVE:
            return True
        if self is CampaignStatus.DELETED:
            return False
        raise ValueError(f"Unhandled campaign status: {self}")


class Campaign(SQLModel, table=True):
    """
    Campaign entity.
    Deletion is logical only: status moves to 'deleted' and the row stays.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Basic info
    name: str = Field(index=True)
    description: str

    status: CampaignStatus = Field(default=CampaignStatus.ACTIVE, index=True)

    # Lead references (URLs or identifiers, not foreign keys)
    leads: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB, "postgresql"), nullable=False),
    )
    # Opaque sending-account identifiers
    account_ids: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON().with_variant(JSONB, "postgresql"), nullable=False),
    )

    # Timestamps (UTC, timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
