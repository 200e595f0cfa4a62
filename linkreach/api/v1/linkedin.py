"""LinkedIn profile lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from linkreach.api.v1._authz import current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.dependencies import get_profile_scraper
from linkreach.integrations.profile_scraper import ProfileScraperClient
from linkreach.schemas.common import ok
from linkreach.schemas.team import ScrapeRequest

router = APIRouter(prefix="/linkedin", tags=["linkedin"])


@router.post("/scrape")
def scrape_profile(
    payload: ScrapeRequest,
    user: TenantContext = Depends(current_user),
    scraper: ProfileScraperClient = Depends(get_profile_scraper),
) -> dict:
    profile = scraper.scrape_profile(payload.linkedin_url.strip())
    return ok(profile.model_dump(by_alias=True))
