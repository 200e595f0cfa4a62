"""Funnel analytics, dashboard counters and LLM-written insights."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import datetime, time, timedelta, timezone
from typing import Any

from sqlalchemy import func

from linkreach.core.exceptions import UpstreamServiceError
from linkreach.llm.client import LLMRequest
from linkreach.llm.prompts import render_insights_prompt
from linkreach.models import Campaign, Message, Prospect, UserProfile
from linkreach.models.enums import (
    CONTACTED_STATUSES,
    MEETING_STATUSES,
    RESPONDED_STATUSES,
    CampaignStatus,
    ProspectStatus,
)
from linkreach.services.base_service import BaseService
from linkreach.services.message_service import TextGenerator

logger = logging.getLogger(__name__)

TOP_CAMPAIGNS = 5
RECENT_ITEMS = 5


def _rate(numerator: int, denominator: int) -> int:
    return round(numerator / denominator * 100) if denominator else 0


def _message_performance(sent) -> dict[str, Any]:
    total, opened, replied = sent.with_entities(
        func.count(Message.id), func.count(Message.opened_at), func.count(Message.replied_at)
    ).one()
    return {
        "sent": total,
        "opened": opened,
        "replied": replied,
        "open_rate": round(opened / total * 100, 1) if total else 0.0,
        "reply_rate": round(replied / total * 100, 1) if total else 0.0,
    }


def _funnel(status_counts: Counter) -> dict[str, int]:
    contacted = sum(count for status, count in status_counts.items() if status in CONTACTED_STATUSES)
    responded = sum(count for status, count in status_counts.items() if status in RESPONDED_STATUSES)
    return {
        "total_prospects": sum(status_counts.values()),
        "prospects_contacted": contacted,
        "responses_received": responded,
        "meetings_booked": sum(count for status, count in status_counts.items() if status in MEETING_STATUSES),
        "conversions": status_counts.get(ProspectStatus.CONVERTED.value, 0),
        "response_rate": _rate(responded, contacted),
    }


class AnalyticsService(BaseService):
    def __init__(self, db, context, llm: TextGenerator | None = None) -> None:
        super().__init__(db, context)
        self.llm = llm

    def _status_counts(self, query) -> Counter:
        rows = query.with_entities(Prospect.status, func.count(Prospect.id)).group_by(Prospect.status).all()
        return Counter({status: count for status, count in rows})

    def overview(self) -> dict[str, Any]:
        """Company-wide analytics for leadership, own-scope analytics otherwise."""
        if self.context.can("analytics.view_company"):
            return self.company_analytics()
        return self.own_analytics()

    def own_analytics(self) -> dict[str, Any]:
        prospects = self.company_scoped(Prospect).filter(Prospect.assigned_to == self.context.user_id)
        sent = self.company_scoped(Message).filter(
            Message.sent_by == self.context.user_id, Message.sent_at.is_not(None)
        )
        overview = _funnel(self._status_counts(prospects))
        performance = _message_performance(sent)
        overview["messages_sent"] = performance["sent"]
        overview["open_rate"] = _rate(performance["opened"], performance["sent"])

        recent = (
            sent.join(Prospect, Prospect.id == Message.prospect_id)
            .with_entities(
                Message.id,
                Message.content,
                Message.sent_at,
                Prospect.full_name,
                Prospect.company,
                Prospect.status,
            )
            .order_by(Message.sent_at.desc())
            .limit(10)
            .all()
        )
        return {
            "scope": "own",
            "role": self.context.role,
            "overview": overview,
            "message_performance": performance,
            "recent_activity": [
                {
                    "id": row.id,
                    "content": row.content,
                    "sent_at": row.sent_at,
                    "prospect": {"full_name": row.full_name, "company": row.company, "status": row.status},
                }
                for row in recent
            ],
        }

    def company_analytics(self) -> dict[str, Any]:
        prospects = self.company_scoped(Prospect)
        campaigns = self.company_scoped(Campaign).order_by(Campaign.created_at.desc(), Campaign.id.desc()).all()
        sent = self.company_scoped(Message).filter(Message.sent_at.is_not(None))

        overall = self._status_counts(prospects)
        overview = _funnel(overall)
        performance = _message_performance(sent)
        overview.update(
            {
                "total_campaigns": len(campaigns),
                "active_campaigns": sum(1 for c in campaigns if c.status == CampaignStatus.ACTIVE.value),
                "messages_sent": performance["sent"],
                "open_rate": _rate(performance["opened"], performance["sent"]),
                "conversion_rate": _rate(overall.get(ProspectStatus.CONVERTED.value, 0), sum(overall.values())),
                "companies_contacted": prospects.filter(Prospect.company.is_not(None))
                .with_entities(func.count(func.distinct(Prospect.company)))
                .scalar()
                or 0,
                "industries_targeted": prospects.filter(Prospect.industry.is_not(None))
                .with_entities(func.count(func.distinct(Prospect.industry)))
                .scalar()
                or 0,
            }
        )

        by_campaign: dict[int, Counter] = defaultdict(Counter)
        for campaign_id, status, count in (
            prospects.filter(Prospect.campaign_id.is_not(None))
            .with_entities(Prospect.campaign_id, Prospect.status, func.count(Prospect.id))
            .group_by(Prospect.campaign_id, Prospect.status)
            .all()
        ):
            by_campaign[campaign_id][status] = count
        sent_by_campaign = dict(
            sent.filter(Message.campaign_id.is_not(None))
            .with_entities(Message.campaign_id, func.count(Message.id))
            .group_by(Message.campaign_id)
            .all()
        )
        campaign_performance = []
        for campaign in campaigns:
            funnel = _funnel(by_campaign.get(campaign.id, Counter()))
            campaign_performance.append(
                {
                    "id": campaign.id,
                    "name": campaign.name,
                    "status": campaign.status,
                    "total_prospects": funnel["total_prospects"],
                    "contacted": funnel["prospects_contacted"],
                    "responses": funnel["responses_received"],
                    "meetings": funnel["meetings_booked"],
                    "response_rate": funnel["response_rate"],
                    "messages_sent": sent_by_campaign.get(campaign.id, 0),
                }
            )
        top_campaigns = sorted(campaign_performance, key=lambda item: item["response_rate"], reverse=True)[:TOP_CAMPAIGNS]

        return {
            "scope": "company",
            "role": self.context.role,
            "overview": overview,
            "message_performance": performance,
            "status_breakdown": dict(overall),
            "campaign_performance": campaign_performance,
            "top_campaigns": top_campaigns,
            "team_performance": self._team_performance(prospects, sent),
        }

    def _team_performance(self, prospects, sent) -> list[dict[str, Any]]:
        members = (
            self.company_scoped(UserProfile)
            .filter(UserProfile.role.in_(("manager", "rep")))
            .order_by(UserProfile.full_name)
            .all()
        )
        by_member: dict[int, Counter] = defaultdict(Counter)
        for assignee, status, count in (
            prospects.filter(Prospect.assigned_to.is_not(None))
            .with_entities(Prospect.assigned_to, Prospect.status, func.count(Prospect.id))
            .group_by(Prospect.assigned_to, Prospect.status)
            .all()
        ):
            by_member[assignee][status] = count
        sent_by_member = dict(
            sent.with_entities(Message.sent_by, func.count(Message.id)).group_by(Message.sent_by).all()
        )

        team = []
        for member in members:
            funnel = _funnel(by_member.get(member.id, Counter()))
            team.append(
                {
                    "id": member.id,
                    "name": member.full_name,
                    "role": member.role,
                    "prospects_assigned": funnel["total_prospects"],
                    "messages_sent": sent_by_member.get(member.id, 0),
                    "contacted": funnel["prospects_contacted"],
                    "responses": funnel["responses_received"],
                    "response_rate": funnel["response_rate"],
                }
            )
        return team

    def insights(self, analytics_data: dict[str, Any] | None = None) -> dict[str, Any]:
        if self.llm is None:
            raise UpstreamServiceError("LLM client is not configured.", provider="llm")
        data = analytics_data if analytics_data else self.company_analytics()
        response = self.llm.generate(
            LLMRequest(prompt_key="analytics.insights", prompt=render_insights_prompt(data), max_tokens=1500)
        )
        logger.info("analytics.insights.generated", extra={"event": "analytics.insights.generated"})
        return {"insights": response.text.strip(), "generated_at": datetime.now(timezone.utc).isoformat()}

    def dashboard_stats(self) -> dict[str, Any]:
        """Headline counters for the dashboard, limited to what the caller may see."""
        now = datetime.now(timezone.utc)
        day_start = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
        prospects = self.scoped(Prospect)
        counts = self._status_counts(prospects)
        funnel = _funnel(counts)

        recent_campaigns = (
            self.scoped(Campaign)
            .order_by(Campaign.created_at.desc(), Campaign.id.desc())
            .limit(RECENT_ITEMS)
            .all()
        )
        prospect_counts: dict[int, int] = {}
        if recent_campaigns:
            prospect_counts = dict(
                prospects.filter(Prospect.campaign_id.in_([campaign.id for campaign in recent_campaigns]))
                .with_entities(Prospect.campaign_id, func.count(Prospect.id))
                .group_by(Prospect.campaign_id)
                .all()
            )
        recent_prospects = prospects.order_by(Prospect.created_at.desc(), Prospect.id.desc()).limit(RECENT_ITEMS).all()

        return {
            "total_prospects": funnel["total_prospects"],
            "active_campaigns": self.scoped(Campaign).filter(Campaign.status == CampaignStatus.ACTIVE.value).count(),
            "messages_sent_today": self.scoped(Message)
            .filter(Message.sent_at.is_not(None), Message.sent_at >= day_start)
            .count(),
            "response_rate": funnel["response_rate"],
            "meetings_booked": prospects.filter(
                Prospect.status == ProspectStatus.MEETING_BOOKED.value,
                Prospect.updated_at >= now - timedelta(days=7),
            ).count(),
            "conversions": funnel["conversions"],
            "recent_campaigns": [
                {
                    "id": campaign.id,
                    "name": campaign.name,
                    "status": campaign.status,
                    "created_at": campaign.created_at,
                    "prospects_count": prospect_counts.get(campaign.id, 0),
                }
                for campaign in recent_campaigns
            ],
            "recent_prospects": [
                {
                    "id": prospect.id,
                    "first_name": prospect.first_name,
                    "last_name": prospect.last_name,
                    "full_name": prospect.full_name,
                    "title": prospect.title,
                    "company": prospect.company,
                    "status": prospect.status,
                    "created_at": prospect.created_at,
                }
                for prospect in recent_prospects
            ],
        }
