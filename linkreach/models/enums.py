"""Canonical enum values for the company-scoped schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    REP = "rep"


class SubscriptionTier(str, enum.Enum):
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TRIAL = "trial"


class CampaignStatus(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class ProspectStatus(str, enum.Enum):
    NEW = "new"
    CONTACTED = "contacted"
    RESPONDED = "responded"
    MEETING_BOOKED = "meeting_booked"
    CONVERTED = "converted"
    NOT_INTERESTED = "not_interested"


class MessageType(str, enum.Enum):
    CONNECTION_REQUEST = "connection_request"
    FOLLOW_UP = "follow_up"
    REPLY = "reply"


class AITone(str, enum.Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ENTHUSIASTIC = "enthusiastic"
    EDUCATIONAL = "educational"


# Progress groups used by campaign stats and analytics.
CONTACTED_STATUSES = frozenset(
    {
        ProspectStatus.CONTACTED.value,
        ProspectStatus.RESPONDED.value,
        ProspectStatus.MEETING_BOOKED.value,
        ProspectStatus.CONVERTED.value,
    }
)
RESPONDED_STATUSES = frozenset(
    {
        ProspectStatus.RESPONDED.value,
        ProspectStatus.MEETING_BOOKED.value,
        ProspectStatus.CONVERTED.value,
    }
)
MEETING_STATUSES = frozenset({ProspectStatus.MEETING_BOOKED.value, ProspectStatus.CONVERTED.value})
