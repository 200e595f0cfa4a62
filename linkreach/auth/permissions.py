"""Static role/permission table.

Every gated action maps to the set of roles allowed to perform it. The table
only decides which routes a role may reach; row-level "own records" scoping
lives in ``linkreach.auth.tenant_context``.
"""

from __future__ import annotations

from linkreach.core.exceptions import AuthorizationError

ADMIN = "admin"
MANAGER = "manager"
REP = "rep"

ROLES: tuple[str, ...] = (ADMIN, MANAGER, REP)

_ADMIN_ONLY = frozenset({ADMIN})
_LEADERSHIP = frozenset({ADMIN, MANAGER})
_EVERYONE = frozenset(ROLES)

PERMISSIONS: dict[str, frozenset[str]] = {
    "company.manage": _ADMIN_ONLY,
    "billing.manage": _ADMIN_ONLY,
    "crm.configure": _ADMIN_ONLY,
    "campaigns.delete": _ADMIN_ONLY,
    "team.manage": _LEADERSHIP,
    "campaigns.create": _LEADERSHIP,
    "campaigns.edit": _LEADERSHIP,
    "campaigns.view_all": _LEADERSHIP,
    "prospects.view_all": _LEADERSHIP,
    "prospects.edit_all": _LEADERSHIP,
    "prospects.assign": _LEADERSHIP,
    "analytics.view_company": _LEADERSHIP,
    "analytics.view_team": _LEADERSHIP,
    "messages.view_all": _LEADERSHIP,
    "prospects.view_own": _EVERYONE,
    "analytics.view_own": _EVERYONE,
    "messages.send": _EVERYONE,
}

ROLE_DESCRIPTIONS: dict[str, dict[str, str]] = {
    ADMIN: {
        "name": "Administrator",
        "description": "Full access to company settings, billing, team and all campaigns.",
    },
    MANAGER: {
        "name": "Sales Manager",
        "description": "Manages campaigns and the team, sees company-wide prospects and analytics.",
    },
    REP: {
        "name": "Sales Rep",
        "description": "Works assigned prospects and sends outreach messages.",
    },
}


def has_permission(role: str | None, action: str) -> bool:
    """Pure lookup; unknown roles and unknown actions are denied."""
    if not role:
        return False
    return role.lower() in PERMISSIONS.get(action, frozenset())


def require_permission(role: str | None, action: str) -> None:
    """Raise when a role may not perform an action."""
    if has_permission(role, action):
        return
    raise AuthorizationError(f"Role '{role}' is not allowed to perform '{action}'.")


def permissions_for_role(role: str) -> set[str]:
    """Return every action granted to a role."""
    return {action for action, roles in PERMISSIONS.items() if role.lower() in roles}
