"""Message schemas for generation, editing and mark-as-sent."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from linkreach.models.enums import MessageType


class GenerateMessageRequest(BaseModel):
    message_type: MessageType = MessageType.CONNECTION_REQUEST


class MessageUpdateRequest(BaseModel):
    content: str | None = Field(default=None, min_length=1, max_length=10000)
    subject: str | None = Field(default=None, max_length=255)
    variations: list[str] | None = None
    # Engagement tracking, accepted only once the message is sent.
    opened: bool | None = None
    replied: bool | None = None


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    prospect_id: int
    campaign_id: int | None = None
    company_id: int
    subject: str | None = None
    content: str
    variations: list[str] | None = None
    message_type: str
    sent_at: datetime | None = None
    sent_by: int | None = None
    opened_at: datetime | None = None
    replied_at: datetime | None = None
    created_at: datetime | None = None


class GeneratedMessage(BaseModel):
    message: str
    subject: str | None = None
    message_id: int
    prospect_name: str
