"""Campaign endpoints, including discovery and bulk prospect import."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import authorize, current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.config import Config
from linkreach.core.dependencies import get_db_session, get_people_search, get_settings
from linkreach.integrations.people_search import PeopleSearchClient
from linkreach.models import Campaign
from linkreach.schemas.campaigns import CampaignCreateRequest, CampaignResponse, CampaignStats, CampaignUpdateRequest
from linkreach.schemas.common import ok
from linkreach.schemas.discovery import AddProspectsRequest, DiscoverRequest
from linkreach.schemas.prospects import ProspectResponse
from linkreach.services.campaign_service import CampaignService
from linkreach.services.discovery_service import DiscoveryCriteria, DiscoveryService
from linkreach.services.prospect_service import ProspectService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


def _serialize(campaign: Campaign, stats: CampaignStats | None = None) -> dict:
    body = CampaignResponse.model_validate(campaign).model_dump()
    if stats is not None:
        body["stats"] = stats.model_dump()
    return body


@router.get("")
def list_campaigns(
    status: str | None = Query(default=None, max_length=20),
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    service = CampaignService(db, user)
    campaigns = service.list_campaigns(status=status)
    stats = service.stats_for([campaign.id for campaign in campaigns])
    return ok([_serialize(campaign, stats.get(campaign.id)) for campaign in campaigns], count=len(campaigns))


@router.post("")
def create_campaign(
    payload: CampaignCreateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.create")
    campaign = CampaignService(db, user).create_campaign(payload)
    return ok(_serialize(campaign))


@router.get("/{campaign_id}")
def get_campaign(
    campaign_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    service = CampaignService(db, user)
    campaign = service.get_campaign(campaign_id)
    return ok(_serialize(campaign, service.stats_for([campaign.id])[campaign.id]))


@router.put("/{campaign_id}")
def update_campaign(
    campaign_id: int,
    payload: CampaignUpdateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.edit")
    return ok(_serialize(CampaignService(db, user).update_campaign(campaign_id, payload)))


@router.delete("/{campaign_id}")
def delete_campaign(
    campaign_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.delete")
    CampaignService(db, user).delete_campaign(campaign_id)
    return ok(None, message="Campaign deleted")


@router.post("/{campaign_id}/start")
def start_campaign(
    campaign_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.edit")
    return ok(_serialize(CampaignService(db, user).start(campaign_id)), message="Campaign started")


@router.post("/{campaign_id}/pause")
def pause_campaign(
    campaign_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.edit")
    return ok(_serialize(CampaignService(db, user).pause(campaign_id)), message="Campaign paused")


@router.post("/{campaign_id}/complete")
def complete_campaign(
    campaign_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.edit")
    return ok(_serialize(CampaignService(db, user).complete(campaign_id)), message="Campaign completed")


@router.post("/{campaign_id}/discover-prospects")
def discover_prospects(
    campaign_id: int,
    payload: DiscoverRequest | None = None,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
    people_search: PeopleSearchClient = Depends(get_people_search),
) -> dict:
    authorize(user, "campaigns.edit")
    campaign = CampaignService(db, user).get_campaign(campaign_id)
    CampaignService.assert_accepts_prospects(campaign)

    enrich_limit = settings.DISCOVERY_DEFAULT_ENRICH_LIMIT
    if payload is not None and payload.enrich_limit is not None:
        enrich_limit = payload.enrich_limit
    criteria = DiscoveryCriteria.from_target_criteria(
        campaign.target_criteria,
        limit=settings.DISCOVERY_SEARCH_LIMIT,
        enrich_limit=enrich_limit,
    )
    result = DiscoveryService(
        people_search,
        batch_size=settings.ENRICH_BATCH_SIZE,
        batch_delay_seconds=settings.ENRICH_BATCH_DELAY_SECONDS,
    ).discover(criteria)

    if not result.candidates:
        return ok([], count=0, message="No prospects found. Try broader targeting criteria.")
    return ok(
        [candidate.model_dump(by_alias=True) for candidate in result.candidates],
        count=len(result.candidates),
        details={
            "searched": result.searched,
            "enrichment_requested": len(result.enriched_ids),
            "enriched": result.enriched_found,
            "failed_batches": result.failed_batches,
        },
    )


@router.post("/{campaign_id}/add-prospects")
def add_prospects(
    campaign_id: int,
    payload: AddProspectsRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "campaigns.edit")
    campaign = CampaignService(db, user).get_campaign(campaign_id)
    CampaignService.assert_accepts_prospects(campaign)

    created, skipped = ProspectService(db, user).add_candidates(campaign, payload.prospects)
    message = f"Added {len(created)} prospects to campaign"
    if skipped:
        message += f" ({skipped} duplicates skipped)"
    return ok(
        [ProspectResponse.model_validate(prospect).model_dump() for prospect in created],
        count=len(created),
        message=message,
        details={"skipped": skipped} if skipped else None,
    )
