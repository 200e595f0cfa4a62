"""Dependency providers for API handlers.

Collaborators (database, LLM, people search, profile scraper) are built once
by ``create_app`` and stored on ``app.state``; handlers reach them only
through these providers.
"""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from linkreach.auth.jwt import ACCESS, decode_jwt
from linkreach.auth.tenant_context import TenantContext, from_claims
from linkreach.core.config import Config
from linkreach.core.exceptions import AuthenticationError
from linkreach.integrations.people_search import PeopleSearchClient
from linkreach.integrations.profile_scraper import ProfileScraperClient
from linkreach.llm.client import LLMClient
from linkreach.models import UserProfile


def get_settings(request: Request) -> Config:
    """Return validated application configuration."""
    return request.app.state.config


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from request.app.state.database.get_db()


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client


def get_people_search(request: Request) -> PeopleSearchClient:
    return request.app.state.people_search


def get_profile_scraper(request: Request) -> ProfileScraperClient:
    return request.app.state.profile_scraper


def resolve_current_user(token: str, db: Session, settings: Config) -> TenantContext:
    """Resolve the caller from an access token.

    Role and company are read from the stored profile, so role changes apply
    without waiting for the token to expire.
    """
    claims = decode_jwt(token=token, secret=settings.JWT_SECRET, expected_use=ACCESS)
    context = from_claims(claims)

    user = db.get(UserProfile, context.user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Unknown or inactive user.")
    if user.company_id != context.company_id:
        raise AuthenticationError("Token company does not match user profile.")
    return TenantContext(user_id=user.id, company_id=user.company_id, role=user.role.lower())
