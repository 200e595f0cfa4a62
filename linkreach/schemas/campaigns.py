"""Campaign request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from linkreach.models.enums import AITone, CampaignStatus


class TargetCriteria(BaseModel):
    titles: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)


class CampaignCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    target_criteria: TargetCriteria = Field(default_factory=TargetCriteria)
    message_template: str = Field(min_length=1, max_length=10000)
    ai_personalization_enabled: bool = True
    ai_tone: AITone = AITone.PROFESSIONAL
    ai_max_length: int = Field(default=800, ge=50, le=5000)
    daily_contact_limit: int = Field(default=20, ge=1, le=1000)


class CampaignUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: CampaignStatus | None = None
    target_criteria: TargetCriteria | None = None
    message_template: str | None = Field(default=None, min_length=1, max_length=10000)
    ai_personalization_enabled: bool | None = None
    ai_tone: AITone | None = None
    ai_max_length: int | None = Field(default=None, ge=50, le=5000)
    daily_contact_limit: int | None = Field(default=None, ge=1, le=1000)


class CampaignStats(BaseModel):
    total_prospects: int = 0
    contacted: int = 0
    responses: int = 0
    meetings: int = 0


class CampaignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    created_by: int | None = None
    name: str
    description: str | None = None
    status: str
    target_criteria: TargetCriteria
    message_template: str
    ai_personalization_enabled: bool
    ai_tone: str
    ai_max_length: int
    daily_contact_limit: int
    started_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    stats: CampaignStats | None = None
