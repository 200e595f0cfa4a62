"""Message edit and mark-as-sent endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import authorize, current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.dependencies import get_db_session
from linkreach.schemas.common import ok
from linkreach.schemas.messages import MessageResponse, MessageUpdateRequest
from linkreach.services.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("/{message_id}/send")
def send_message(
    message_id: int,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "messages.send")
    message = MessageService(db, user).mark_sent(message_id)
    return ok(MessageResponse.model_validate(message).model_dump(), message="Message marked as sent")


@router.patch("/{message_id}")
def update_message(
    message_id: int,
    payload: MessageUpdateRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    authorize(user, "messages.send")
    message = MessageService(db, user).update_message(message_id, payload)
    return ok(MessageResponse.model_validate(message).model_dump())
