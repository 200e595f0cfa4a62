"""Campaign CRUD, status transitions and per-campaign funnel stats."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import func

from linkreach.core.exceptions import ConflictError
from linkreach.models import Campaign, Message, Prospect
from linkreach.models.enums import (
    CONTACTED_STATUSES,
    MEETING_STATUSES,
    RESPONDED_STATUSES,
    CampaignStatus,
)
from linkreach.orchestration.state_machine import (
    CAMPAIGN_STATE_MACHINE,
    DISCOVERY_OPEN_STATES,
    OUTREACH_OPEN_STATES,
)
from linkreach.schemas.campaigns import CampaignCreateRequest, CampaignStats, CampaignUpdateRequest
from linkreach.services.base_service import BaseService
from linkreach.utils.validators import sanitize_optional, sanitize_text

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CampaignService(BaseService):
    """Service for campaign CRUD and the draft/active/paused/completed lifecycle."""

    def list_campaigns(self, status: str | None = None) -> list[Campaign]:
        query = self.scoped(Campaign)
        if status:
            query = query.filter(Campaign.status == status)
        return query.order_by(Campaign.created_at.desc(), Campaign.id.desc()).all()

    def get_campaign(self, campaign_id: int) -> Campaign:
        return self.get_scoped(Campaign, campaign_id, "Campaign")

    def get_company_campaign(self, campaign_id: int) -> Campaign:
        """Company-level lookup used when attaching prospects to a campaign."""
        return self.get_scoped(Campaign, campaign_id, "Campaign", company_only=True)

    def create_campaign(self, payload: CampaignCreateRequest) -> Campaign:
        campaign = Campaign(
            company_id=self.context.company_id,
            created_by=self.context.user_id,
            name=sanitize_text(payload.name, max_len=255),
            description=sanitize_optional(payload.description),
            status=CampaignStatus.DRAFT.value,
            target_criteria=payload.target_criteria.model_dump(),
            message_template=sanitize_text(payload.message_template),
            ai_personalization_enabled=payload.ai_personalization_enabled,
            ai_tone=payload.ai_tone.value,
            ai_max_length=payload.ai_max_length,
            daily_contact_limit=payload.daily_contact_limit,
        )
        self.db.add(campaign)
        self.commit()
        self.db.refresh(campaign)
        logger.info(
            "campaign.created",
            extra={"event": "campaign.created", "campaign_id": campaign.id, "company_id": campaign.company_id},
        )
        return campaign

    def update_campaign(self, campaign_id: int, payload: CampaignUpdateRequest) -> Campaign:
        campaign = self.get_campaign(campaign_id)
        changes = payload.model_dump(exclude_unset=True)

        target_status = changes.pop("status", None)
        if target_status is not None:
            self._apply_transition(campaign, CampaignStatus(target_status).value)

        for field in ("name", "message_template"):
            if changes.get(field) is not None:
                setattr(campaign, field, sanitize_text(changes[field]))
        if "description" in changes:
            campaign.description = sanitize_optional(changes["description"])
        if changes.get("target_criteria") is not None:
            campaign.target_criteria = payload.target_criteria.model_dump()
        if changes.get("ai_tone") is not None:
            campaign.ai_tone = payload.ai_tone.value
        for field in ("ai_personalization_enabled", "ai_max_length", "daily_contact_limit"):
            if changes.get(field) is not None:
                setattr(campaign, field, changes[field])

        self.commit()
        self.db.refresh(campaign)
        return campaign

    def delete_campaign(self, campaign_id: int) -> None:
        campaign = self.get_campaign(campaign_id)
        # Prospects and messages outlive their campaign.
        self.db.query(Prospect).filter(Prospect.campaign_id == campaign.id).update(
            {Prospect.campaign_id: None}, synchronize_session=False
        )
        self.db.query(Message).filter(Message.campaign_id == campaign.id).update(
            {Message.campaign_id: None}, synchronize_session=False
        )
        self.db.delete(campaign)
        self.commit()
        logger.info("campaign.deleted", extra={"event": "campaign.deleted", "campaign_id": campaign_id})

    def start(self, campaign_id: int) -> Campaign:
        return self._transition(campaign_id, CampaignStatus.ACTIVE.value)

    def pause(self, campaign_id: int) -> Campaign:
        return self._transition(campaign_id, CampaignStatus.PAUSED.value)

    def complete(self, campaign_id: int) -> Campaign:
        return self._transition(campaign_id, CampaignStatus.COMPLETED.value)

    def _transition(self, campaign_id: int, target: str) -> Campaign:
        campaign = self.get_campaign(campaign_id)
        self._apply_transition(campaign, target, allow_same=False)
        self.commit()
        self.db.refresh(campaign)
        return campaign

    def _apply_transition(self, campaign: Campaign, target: str, allow_same: bool = True) -> None:
        current = campaign.status
        if current == target and allow_same:
            return
        CAMPAIGN_STATE_MACHINE.assert_transition(current, target)
        campaign.status = target
        if target == CampaignStatus.ACTIVE.value and campaign.started_at is None:
            campaign.started_at = _now()
        if target == CampaignStatus.COMPLETED.value:
            campaign.completed_at = _now()
        logger.info(
            "campaign.status.changed",
            extra={"event": "campaign.status.changed", "campaign_id": campaign.id, "from": current, "to": target},
        )

    @staticmethod
    def assert_accepts_prospects(campaign: Campaign) -> None:
        if campaign.status not in DISCOVERY_OPEN_STATES:
            raise ConflictError(f"Campaign is {campaign.status}; prospects can no longer be added.")

    @staticmethod
    def assert_accepts_outreach(campaign: Campaign) -> None:
        if campaign.status not in OUTREACH_OPEN_STATES:
            raise ConflictError(f"Campaign is {campaign.status}; outreach is not allowed.")

    def stats_for(self, campaign_ids: list[int]) -> dict[int, CampaignStats]:
        """Funnel counts per campaign from a single grouped query over visible prospects."""
        if not campaign_ids:
            return {}
        rows = (
            self.scoped(Prospect)
            .with_entities(Prospect.campaign_id, Prospect.status, func.count(Prospect.id))
            .filter(Prospect.campaign_id.in_(campaign_ids))
            .group_by(Prospect.campaign_id, Prospect.status)
            .all()
        )
        by_campaign: dict[int, dict[str, int]] = defaultdict(dict)
        for campaign_id, status, count in rows:
            by_campaign[campaign_id][status] = count
        return {campaign_id: funnel_stats(by_campaign.get(campaign_id, {})) for campaign_id in campaign_ids}


def funnel_stats(status_counts: dict[str, int]) -> CampaignStats:
    return CampaignStats(
        total_prospects=sum(status_counts.values()),
        contacted=sum(count for status, count in status_counts.items() if status in CONTACTED_STATUSES),
        responses=sum(count for status, count in status_counts.items() if status in RESPONDED_STATUSES),
        meetings=sum(count for status, count in status_counts.items() if status in MEETING_STATUSES),
    )
