"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import current_user
from linkreach.auth.permissions import ROLE_DESCRIPTIONS, permissions_for_role
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.config import Config
from linkreach.core.dependencies import get_db_session, get_settings
from linkreach.models import UserProfile
from linkreach.schemas.auth import LoginRequest, RefreshRequest, SignupRequest, TokenResponse, UserProfileResponse
from linkreach.schemas.common import ok
from linkreach.services.account_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_body(user: UserProfile, tokens) -> dict:
    return {
        "user": UserProfileResponse.model_validate(user).model_dump(),
        "tokens": TokenResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_type=tokens.token_type,
        ).model_dump(),
    }


@router.post("/signup")
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user, tokens = AuthService(db, settings).signup(payload)
    return ok(_session_body(user, tokens))


@router.post("/login")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user, tokens = AuthService(db, settings).login(payload)
    return ok(_session_body(user, tokens))


@router.post("/refresh")
def refresh(
    payload: RefreshRequest,
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    tokens = AuthService(db, settings).refresh(payload.refresh_token)
    return ok(
        TokenResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_type=tokens.token_type,
        ).model_dump()
    )


@router.get("/me")
def me(user: TenantContext = Depends(current_user), db: Session = Depends(get_db_session)) -> dict:
    profile = db.get(UserProfile, user.user_id)
    return ok(
        {
            **UserProfileResponse.model_validate(profile).model_dump(),
            "role_info": ROLE_DESCRIPTIONS.get(user.role),
            "permissions": sorted(permissions_for_role(user.role)),
        }
    )
