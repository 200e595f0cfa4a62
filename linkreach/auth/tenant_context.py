"""Company context resolution and central row scoping.

Every list, aggregate and single-row lookup goes through ``scope_query`` so the
company filter and the rep "own records" filter are applied in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Query

from linkreach.auth.permissions import has_permission
from linkreach.core.exceptions import AuthenticationError, NotFoundError
from linkreach.models import Campaign, Message, Prospect


@dataclass(frozen=True)
class TenantContext:
    user_id: int
    company_id: int
    role: str

    def can(self, action: str) -> bool:
        return has_permission(self.role, action)


def from_claims(claims: dict[str, Any]) -> TenantContext:
    """Build company context from JWT claims."""
    try:
        return TenantContext(
            user_id=int(claims["sub"]),
            company_id=int(claims["company_id"]),
            role=str(claims["role"]).lower(),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Token claims are missing company/user context.") from exc


def scope_query(query: Query, model: type, context: TenantContext) -> Query:
    """Restrict ``query`` to rows ``context`` may see.

    Company filtering always applies. Roles without the matching ``view_all``
    permission only see their own rows: prospects assigned to them, messages
    they sent, and campaigns holding at least one of their prospects.
    """
    query = query.filter(model.company_id == context.company_id)

    if model is Prospect and not context.can("prospects.view_all"):
        query = query.filter(Prospect.assigned_to == context.user_id)
    elif model is Message and not context.can("messages.view_all"):
        query = query.filter(Message.sent_by == context.user_id)
    elif model is Campaign and not context.can("campaigns.view_all"):
        owned = select(Prospect.campaign_id).where(
            Prospect.company_id == context.company_id,
            Prospect.assigned_to == context.user_id,
            Prospect.campaign_id.is_not(None),
        )
        query = query.filter(Campaign.id.in_(owned))
    return query


def enforce_tenant_match(entity_company_id: int, context: TenantContext) -> None:
    """Cross-company rows are reported as missing, never returned."""
    if int(entity_company_id) != int(context.company_id):
        raise NotFoundError("Resource not found.")
