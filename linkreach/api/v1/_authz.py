"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from linkreach.auth.permissions import require_permission
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.config import Config
from linkreach.core.dependencies import get_db_session, get_settings, resolve_current_user
from linkreach.core.exceptions import AuthenticationError


def _extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> TenantContext:
    token = _extract_bearer_token(authorization)
    return resolve_current_user(token=token, db=db, settings=settings)


def authorize(user: TenantContext, action: str) -> TenantContext:
    require_permission(user.role, action)
    return user
