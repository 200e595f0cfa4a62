"""AI rewrite helpers: improve a message, or spin variations of it."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from linkreach.api.v1._authz import authorize, current_user
from linkreach.auth.tenant_context import TenantContext
from linkreach.core.dependencies import get_db_session, get_llm_client
from linkreach.llm.client import LLMClient
from linkreach.schemas.ai import ImproveMessageRequest, VariationsRequest
from linkreach.schemas.common import ok
from linkreach.services.message_service import MessageService

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/improve-message")
def improve_message(
    payload: ImproveMessageRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm_client),
) -> dict:
    authorize(user, "messages.send")
    improved = MessageService(db, user, llm=llm).improve(payload.message, message_id=payload.message_id)
    return ok({"improved_message": improved, "original": payload.message})


@router.post("/variations")
def message_variations(
    payload: VariationsRequest,
    user: TenantContext = Depends(current_user),
    db: Session = Depends(get_db_session),
    llm: LLMClient = Depends(get_llm_client),
) -> dict:
    authorize(user, "messages.send")
    variations = MessageService(db, user, llm=llm).variations(
        payload.message,
        count=payload.count,
        message_id=payload.message_id,
    )
    return ok({"variations": variations, "original": payload.message}, count=len(variations))
