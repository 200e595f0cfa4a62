"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from linkreach.api.v1 import ai, analytics, auth, campaigns, health, linkedin, messages, prospects, team


def get_api_router(prefix: str = "/api/v1") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    api_router.include_router(campaigns.router)
    api_router.include_router(prospects.router)
    api_router.include_router(messages.router)
    api_router.include_router(ai.router)
    api_router.include_router(analytics.router)
    api_router.include_router(linkedin.router)
    api_router.include_router(team.router)
    return api_router
