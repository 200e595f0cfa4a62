"""Prospect endpoints and per-prospect message generation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import authorize, current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.dependencies import get_db_session, get_llm_client
from linkreach.llm.client import LLMClient
from linkreach.models.enums import ProspectStatus
from linkreach.schemas.common import Pagination, ok
from linkreach.schemas.messages import GeneratedMessage, GenerateMessageRequest, MessageResponse
from linkreach.schemas.prospects import ProspectCreateRequest, ProspectResponse, ProspectUpdateRequest
from linkreach.services.message_service import MessageService
from linkreach.services.prospect_service import ProspectService

router = APIRouter(prefix="/prospects", tags=["prospects"])


def _serialize(prospect) -> dict:
    return ProspectResponse.model_validate(prospect).model_dump()


@router.get("")
def list_prospects(
    campaign_id: int | None = Query(default=None),
    status: ProspectStatus | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "prospects.view_own")
    rows, total = ProspectService(db, user).list_prospects(
        campaign_id=campaign_id,
        status=status.value if status else None,
        page=page,
        limit=limit,
    )
    return ok(
        [_serialize(row) for row in rows],
        count=len(rows),
        pagination=Pagination.build(total=total, page=page, limit=limit).model_dump(by_alias=True),
    )


@router.post("")
def create_prospect(
    payload: ProspectCreateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "prospects.view_own")
    return ok(_serialize(ProspectService(db, user).create_prospect(payload)))


@router.get("/{prospect_id}")
def get_prospect(
    prospect_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    return ok(_serialize(ProspectService(db, user).get_prospect(prospect_id)))


@router.patch("/{prospect_id}")
def update_prospect(
    prospect_id: int,
    payload: ProspectUpdateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    return ok(_serialize(ProspectService(db, user).update_prospect(prospect_id, payload)))


@router.delete("/{prospect_id}")
def delete_prospect(
    prospect_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "prospects.edit_all")
    ProspectService(db, user).delete_prospect(prospect_id)
    return ok(None, message="Prospect deleted")


@router.post("/{prospect_id}/generate-message")
def generate_message(
    prospect_id: int,
    payload: GenerateMessageRequest | None = None,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm_client),
) -> dict:
    authorize(user, "messages.send")
    prospect = ProspectService(db, user).get_prospect(prospect_id)
    request = payload or GenerateMessageRequest()
    message, subject = MessageService(db, user, llm=llm).generate_for_prospect(prospect, request.message_type)
    return ok(
        GeneratedMessage(
            message=message.content,
            subject=subject,
            message_id=message.id,
            prospect_name=prospect.full_name,
        ).model_dump()
    )


@router.get("/{prospect_id}/messages")
def list_prospect_messages(
    prospect_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    prospect = ProspectService(db, user).get_prospect(prospect_id)
    messages = MessageService(db, user).list_for_prospect(prospect)
    return ok([MessageResponse.model_validate(message).model_dump() for message in messages], count=len(messages))
