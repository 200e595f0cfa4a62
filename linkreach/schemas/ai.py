"""AI helper request schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImproveMessageRequest(BaseModel):
    message: str = Field(min_length=1, max_length=10000)
    message_id: int | None = None


class VariationsRequest(BaseModel):
    message: str = Field(min_length=1, max_length=10000)
    message_id: int | None = None
    count: int = Field(default=3, ge=1, le=5)


class InsightsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    analytics_data: dict[str, Any] | None = Field(default=None, alias="analyticsData")
