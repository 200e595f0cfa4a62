"""Prospect request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from linkreach.models.enums import ProspectStatus


class ProspectCreateRequest(BaseModel):
    campaign_id: int | None = None
    linkedin_url: str = Field(min_length=1, max_length=500)
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    title: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=120)
    location: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=60)
    headline: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=5000)
    assigned_to: int | None = None


class ProspectUpdateRequest(BaseModel):
    campaign_id: int | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    title: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=120)
    location: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=60)
    headline: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=5000)
    status: ProspectStatus | None = None
    assigned_to: int | None = None


class ProspectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    campaign_id: int | None = None
    linkedin_url: str | None = None
    external_contact_id: str | None = None
    first_name: str
    last_name: str
    full_name: str
    title: str | None = None
    company: str | None = None
    industry: str | None = None
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    headline: str | None = None
    notes: str | None = None
    status: str
    assigned_to: int | None = None
    last_contacted_at: datetime | None = None
    created_at: datetime | None = None
