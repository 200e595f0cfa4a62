"""Signed session tokens for company members.

Tokens are compact HS256 JWTs. Every token names the member (``sub``), the
company it was issued for, the role at issue time and whether it is an
``access`` or ``refresh`` token. Role and company are re-read from the
database on each request, so the role claim is informational only.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from linkreach.core.exceptions import AuthenticationError

ACCESS = "access"
REFRESH = "refresh"

_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


def _segment(obj: dict[str, Any]) -> str:
    raw = json.dumps(obj, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _unsegment(segment: str) -> dict[str, Any]:
    raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    payload = json.loads(raw.decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("token payload must be an object")
    return payload


def _signature(signing_input: str, secret: str) -> str:
    mac = hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256)
    return base64.urlsafe_b64encode(mac.digest()).decode("ascii").rstrip("=")


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign ``payload`` adding ``iat``, ``exp`` and ``jti`` when absent."""
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    issued = int(time.time())
    body = {"iat": issued, "exp": issued + int(ttl.total_seconds()), "jti": secrets.token_hex(16)}
    body.update(payload)
    signing_input = f"{_segment(_HEADER)}.{_segment(body)}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def decode_jwt(
    token: str,
    secret: str,
    expected_use: str | None = None,
    verify_exp: bool = True,
) -> dict[str, Any]:
    """Verify ``token`` and return its claims.

    Raises ``AuthenticationError`` on a malformed token, a bad signature, an
    expired token or a ``token_use`` other than ``expected_use``.
    """
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    parts = token.split(".") if token else []
    if len(parts) != 3:
        raise AuthenticationError("Invalid token format.")

    signing_input = f"{parts[0]}.{parts[1]}"
    if not hmac.compare_digest(_signature(signing_input, secret), parts[2]):
        raise AuthenticationError("Invalid token signature.")
    try:
        claims = _unsegment(parts[1])
    except (UnicodeDecodeError, ValueError) as exc:
        raise AuthenticationError("Invalid token payload.") from exc

    if verify_exp:
        try:
            expires = int(claims["exp"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Token is missing exp claim.") from exc
        if expires < int(time.time()):
            raise AuthenticationError("Token has expired.")
    if expected_use is not None and claims.get("token_use") != expected_use:
        raise AuthenticationError(f"Expected a {expected_use} token.")
    return claims


def create_token_pair(
    user_id: int,
    company_id: int,
    role: str,
    secret: str,
    access_ttl_minutes: int = 60,
    refresh_ttl_days: int = 14,
) -> TokenPair:
    """Issue an access token and a refresh token for one member session."""
    claims = {"sub": str(user_id), "company_id": company_id, "role": role}
    return TokenPair(
        access_token=encode_jwt({**claims, "token_use": ACCESS}, secret, timedelta(minutes=access_ttl_minutes)),
        refresh_token=encode_jwt({**claims, "token_use": REFRESH}, secret, timedelta(days=refresh_ttl_days)),
    )
