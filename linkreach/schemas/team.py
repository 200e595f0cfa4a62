"""Team and company settings schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from linkreach.models.enums import SubscriptionStatus, SubscriptionTier, UserRole


class TeamMemberCreateRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    full_name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8, max_length=256)
    role: UserRole = UserRole.REP


class RoleUpdateRequest(BaseModel):
    role: UserRole


class CompanyUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    industry: str | None = Field(default=None, max_length=120)
    website: str | None = Field(default=None, max_length=500)
    subscription_tier: SubscriptionTier | None = None
    subscription_status: SubscriptionStatus | None = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    industry: str | None = None
    website: str | None = None
    subscription_tier: SubscriptionTier
    subscription_status: SubscriptionStatus
    created_at: datetime | None = None


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    linkedin_url: str = Field(min_length=1, alias="linkedinUrl")
