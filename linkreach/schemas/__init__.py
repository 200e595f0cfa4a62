"""Pydantic schema package for API contracts."""

from linkreach.schemas.ai import ImproveMessageRequest, InsightsRequest, VariationsRequest
from linkreach.schemas.auth import LoginRequest, RefreshRequest, SignupRequest, TokenResponse, UserProfileResponse
from linkreach.schemas.campaigns import (
    CampaignCreateRequest,
    CampaignResponse,
    CampaignStats,
    CampaignUpdateRequest,
    TargetCriteria,
)
from linkreach.schemas.common import Envelope, Pagination, fail, ok
from linkreach.schemas.discovery import AddProspectsRequest, DiscoverRequest, ProspectCandidate
from linkreach.schemas.messages import GeneratedMessage, GenerateMessageRequest, MessageResponse, MessageUpdateRequest
from linkreach.schemas.prospects import ProspectCreateRequest, ProspectResponse, ProspectUpdateRequest
from linkreach.schemas.team import (
    CompanyResponse,
    CompanyUpdateRequest,
    RoleUpdateRequest,
    ScrapeRequest,
    TeamMemberCreateRequest,
)

__all__ = [
    "AddProspectsRequest",
    "CampaignCreateRequest",
    "CampaignResponse",
    "CampaignStats",
    "CampaignUpdateRequest",
    "CompanyResponse",
    "CompanyUpdateRequest",
    "DiscoverRequest",
    "Envelope",
    "GeneratedMessage",
    "GenerateMessageRequest",
    "ImproveMessageRequest",
    "InsightsRequest",
    "LoginRequest",
    "MessageResponse",
    "MessageUpdateRequest",
    "Pagination",
    "ProspectCandidate",
    "ProspectCreateRequest",
    "ProspectResponse",
    "ProspectUpdateRequest",
    "RefreshRequest",
    "RoleUpdateRequest",
    "ScrapeRequest",
    "SignupRequest",
    "TargetCriteria",
    "TeamMemberCreateRequest",
    "TokenResponse",
    "UserProfileResponse",
    "VariationsRequest",
    "fail",
    "ok",
]
