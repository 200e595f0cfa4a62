"""SQLAlchemy model package for the company-scoped schema."""

from linkreach.models.base import Base
from linkreach.models.campaign import Campaign
from linkreach.models.company import Company
from linkreach.models.enums import (
    AITone,
    CampaignStatus,
    MessageType,
    ProspectStatus,
    SubscriptionStatus,
    SubscriptionTier,
    UserRole,
)
from linkreach.models.message import Message
from linkreach.models.prospect import Prospect
from linkreach.models.user_profile import UserProfile

__all__ = [
    "AITone",
    "Base",
    "Campaign",
    "CampaignStatus",
    "Company",
    "Message",
    "MessageType",
    "Prospect",
    "ProspectStatus",
    "SubscriptionStatus",
    "SubscriptionTier",
    "UserProfile",
    "UserRole",
]
