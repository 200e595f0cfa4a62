"""Discovery request and prospect-candidate schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DiscoverRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    enrich_limit: int | None = Field(default=None, ge=0, le=100, alias="enrichLimit")


class ProspectCandidate(BaseModel):
    """A discovered person, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    title: str | None = None
    company: str | None = None
    location: str | None = None
    profile_url: str | None = Field(default=None, alias="profileUrl")
    headline: str | None = None
    photo_url: str | None = Field(default=None, alias="photoUrl")
    email: str | None = None
    phone: str | None = None
    industry: str | None = None
    external_id: str | None = Field(default=None, alias="externalId")


class AddProspectsRequest(BaseModel):
    prospects: list[ProspectCandidate] = Field(min_length=1, max_length=500)
