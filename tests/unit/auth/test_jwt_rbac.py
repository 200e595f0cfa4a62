from __future__ import annotations

from datetime import timedelta

import pytest

from linkreach.auth.jwt import create_token_pair, decode_jwt, encode_jwt
from linkreach.auth.permissions import (
    PERMISSIONS,
    ROLES,
    has_permission,
    permissions_for_role,
    require_permission,
)
from linkreach.core.exceptions import AuthenticationError, AuthorizationError

EXPECTED_ROLES = {
    "company.manage": {"admin"},
    "billing.manage": {"admin"},
    "crm.configure": {"admin"},
    "campaigns.delete": {"admin"},
    "team.manage": {"admin", "manager"},
    "campaigns.create": {"admin", "manager"},
    "campaigns.edit": {"admin", "manager"},
    "campaigns.view_all": {"admin", "manager"},
    "prospects.view_all": {"admin", "manager"},
    "prospects.edit_all": {"admin", "manager"},
    "prospects.assign": {"admin", "manager"},
    "analytics.view_company": {"admin", "manager"},
    "analytics.view_team": {"admin", "manager"},
    "messages.view_all": {"admin", "manager"},
    "prospects.view_own": {"admin", "manager", "rep"},
    "analytics.view_own": {"admin", "manager", "rep"},
    "messages.send": {"admin", "manager", "rep"},
}


def test_jwt_roundtrip_contains_company_claims():
    tokens = create_token_pair(user_id=10, company_id=20, role="manager", secret="test-secret")
    claims = decode_jwt(tokens.access_token, secret="test-secret")
    assert claims["sub"] == "10"
    assert claims["company_id"] == 20
    assert claims["role"] == "manager"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims


def test_refresh_token_is_marked_for_refresh():
    tokens = create_token_pair(user_id=1, company_id=2, role="rep", secret="test-secret")
    assert decode_jwt(tokens.refresh_token, secret="test-secret")["token_use"] == "refresh"


def test_decode_rejects_wrong_secret():
    tokens = create_token_pair(user_id=1, company_id=2, role="rep", secret="test-secret")
    with pytest.raises(AuthenticationError):
        decode_jwt(tokens.access_token, secret="other-secret")


def test_decode_rejects_expired_token():
    token = encode_jwt({"sub": "1"}, secret="test-secret", ttl=timedelta(seconds=-30))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(token, secret="test-secret")


def test_permission_table_matches_role_matrix():
    assert set(PERMISSIONS) == set(EXPECTED_ROLES)
    for action, allowed in EXPECTED_ROLES.items():
        for role in ROLES:
            assert has_permission(role, action) is (role in allowed), (role, action)


def test_unknown_role_or_action_is_denied():
    assert has_permission("owner", "campaigns.create") is False
    assert has_permission(None, "messages.send") is False
    assert has_permission("admin", "campaigns.launch_rockets") is False


def test_role_lookup_is_case_insensitive():
    assert has_permission("ADMIN", "company.manage") is True


def test_require_permission_raises_for_rep():
    require_permission("rep", "messages.send")
    with pytest.raises(AuthorizationError):
        require_permission("rep", "campaigns.create")


def test_rep_permissions_are_own_scope_only():
    assert permissions_for_role("rep") == {"prospects.view_own", "analytics.view_own", "messages.send"}


def test_decode_enforces_expected_token_use():
    tokens = create_token_pair(user_id=1, company_id=2, role="rep", secret="test-secret")
    assert decode_jwt(tokens.access_token, secret="test-secret", expected_use="access")["sub"] == "1"
    with pytest.raises(AuthenticationError, match="refresh"):
        decode_jwt(tokens.access_token, secret="test-secret", expected_use="refresh")


def test_decode_rejects_malformed_token():
    with pytest.raises(AuthenticationError, match="format"):
        decode_jwt("not-a-jwt", secret="test-secret")
