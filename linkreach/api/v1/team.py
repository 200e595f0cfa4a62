"""Team membership and company settings endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import authorize, current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.config import Config
from linkreach.core.dependencies import get_db_session, get_settings
from linkreach.schemas.auth import UserProfileResponse
from linkreach.schemas.common import ok
from linkreach.schemas.team import CompanyResponse, CompanyUpdateRequest, RoleUpdateRequest, TeamMemberCreateRequest
from linkreach.services.account_service import CompanyService, TeamService

router = APIRouter(tags=["team"])


@router.get("/team")
def list_team(user: TenantContext = Depends(current_user), db: Session = Depends(get_db_session)) -> dict:
    members = TeamService(db, user).list_members()
    return ok([UserProfileResponse.model_validate(member).model_dump() for member in members], count=len(members))


@router.post("/team")
def add_team_member(
    payload: TeamMemberCreateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    authorize(user, "team.manage")
    member = TeamService(db, user).add_member(payload, settings)
    return ok(UserProfileResponse.model_validate(member).model_dump())


@router.patch("/team/{member_id}/role")
def change_member_role(
    member_id: int,
    payload: RoleUpdateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "company.manage")
    member = TeamService(db, user).change_role(member_id, payload.role.value)
    return ok(UserProfileResponse.model_validate(member).model_dump())


@router.get("/company")
def get_company(user: TenantContext = Depends(current_user), db: Session = Depends(get_db_session)) -> dict:
    return ok(CompanyResponse.model_validate(CompanyService(db, user).get_company()).model_dump())


@router.patch("/company")
def update_company(
    payload: CompanyUpdateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "company.manage")
    company = CompanyService(db, user).update_company(payload)
    return ok(CompanyResponse.model_validate(company).model_dump())
