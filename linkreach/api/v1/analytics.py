"""Analytics, AI insights and dashboard counters."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import authorize, current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.dependencies import get_db_session, get_llm_client
from linkreach.llm.client import LLMClient
from linkreach.schemas.ai import InsightsRequest
from linkreach.schemas.common import ok
from linkreach.services.analytics_service import AnalyticsService

router = APIRouter(tags=["analytics"])


@router.get("/analytics")
def analytics(user: TenantContext = Depends(current_user), db: Session = Depends(get_db_session)) -> dict:
    authorize(user, "analytics.view_own")
    return ok(AnalyticsService(db, user).overview())


@router.post("/analytics/insights")
def analytics_insights(
    payload: InsightsRequest | None = None,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm_client),
) -> dict:
    authorize(user, "analytics.view_company")
    data = payload.analytics_data if payload else None
    return ok(AnalyticsService(db, user, llm=llm).insights(data))


@router.get("/dashboard/stats")
def dashboard_stats(user: TenantContext = Depends(current_user), db: Session = Depends(get_db_session)) -> dict:
    return ok(AnalyticsService(db, user).dashboard_stats())
