"""Signup, login, team membership and company settings."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from linkreach.auth.jwt import REFRESH, TokenPair, create_token_pair, decode_jwt
from linkreach.auth.permissions import ADMIN
from linkreach.auth.tenant_context import enforce_tenant_match
from linkreach.core.config import Config
from linkreach.core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from linkreach.core.security import hash_password, verify_password
from linkreach.models import Company, UserProfile
from linkreach.models.enums import SubscriptionStatus, SubscriptionTier
from linkreach.schemas.auth import LoginRequest, SignupRequest
from linkreach.schemas.team import CompanyUpdateRequest, TeamMemberCreateRequest
from linkreach.services.base_service import BaseService, commit_session
from linkreach.utils.validators import sanitize_optional, sanitize_text

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and token issuance; runs before any company context exists."""

    def __init__(self, db: Session, config: Config) -> None:
        self.db = db
        self.config = config

    def _tokens(self, user: UserProfile) -> TokenPair:
        return create_token_pair(
            user_id=user.id,
            company_id=user.company_id,
            role=user.role,
            secret=self.config.JWT_SECRET,
            access_ttl_minutes=self.config.JWT_ACCESS_TTL_MINUTES,
            refresh_ttl_days=self.config.JWT_REFRESH_TTL_DAYS,
        )

    def signup(self, payload: SignupRequest) -> tuple[UserProfile, TokenPair]:
        """Create a company and its first admin."""
        if self.db.query(UserProfile).filter(UserProfile.email == payload.email).first():
            raise ConflictError("An account with this email already exists")

        company = Company(
            name=sanitize_text(payload.company_name, max_len=255),
            industry=sanitize_optional(payload.industry),
            subscription_tier=SubscriptionTier.STARTER,
            subscription_status=SubscriptionStatus.TRIAL,
        )
        self.db.add(company)
        self.db.flush()
        user = UserProfile(
            company_id=company.id,
            email=payload.email,
            full_name=sanitize_text(payload.full_name, max_len=255),
            role=ADMIN,
            hashed_password=hash_password(payload.password, pepper=self.config.PASSWORD_PEPPER),
        )
        self.db.add(user)
        commit_session(self.db, conflict="An account with this email already exists")
        self.db.refresh(user)
        logger.info(
            "auth.signup.completed",
            extra={"event": "auth.signup.completed", "company_id": company.id, "user_id": user.id},
        )
        return user, self._tokens(user)

    def login(self, payload: LoginRequest) -> tuple[UserProfile, TokenPair]:
        email = payload.email.strip().lower()
        user = self.db.query(UserProfile).filter(UserProfile.email == email).first()
        if user is None or not verify_password(payload.password, user.hashed_password, pepper=self.config.PASSWORD_PEPPER):
            logger.warning("auth.login.failed", extra={"event": "auth.login.failed"})
            raise AuthenticationError("Invalid credentials.")
        if not user.is_active:
            raise AuthenticationError("Account is disabled.")
        return user, self._tokens(user)

    def refresh(self, refresh_token: str) -> TokenPair:
        claims = decode_jwt(refresh_token, secret=self.config.JWT_SECRET, expected_use=REFRESH)
        try:
            user = self.db.get(UserProfile, int(claims["sub"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid auth claims.") from exc
        if user is None or not user.is_active:
            raise AuthenticationError("Account is no longer active.")
        # Re-read role and company so changes since login take effect.
        return self._tokens(user)


class TeamService(BaseService):
    def list_members(self) -> list[UserProfile]:
        return self.company_scoped(UserProfile).order_by(UserProfile.full_name, UserProfile.id).all()

    def add_member(self, payload: TeamMemberCreateRequest, config: Config) -> UserProfile:
        if payload.role.value == ADMIN and self.context.role != ADMIN:
            raise AuthorizationError("Only admins can add other admins.")
        email = payload.email.strip().lower()
        if self.db.query(UserProfile).filter(UserProfile.email == email).first():
            raise ConflictError("An account with this email already exists")
        member = UserProfile(
            company_id=self.context.company_id,
            email=email,
            full_name=sanitize_text(payload.full_name, max_len=255),
            role=payload.role.value,
            hashed_password=hash_password(payload.password, pepper=config.PASSWORD_PEPPER),
        )
        self.db.add(member)
        self.commit()
        self.db.refresh(member)
        return member

    def change_role(self, member_id: int, role: str) -> UserProfile:
        member = self.db.get(UserProfile, member_id)
        if member is None:
            raise NotFoundError("Team member not found")
        enforce_tenant_match(member.company_id, self.context)
        if member.id == self.context.user_id and role != ADMIN:
            raise ConflictError("Admins cannot demote themselves")
        member.role = role
        self.commit()
        self.db.refresh(member)
        logger.info(
            "team.role.changed",
            extra={"event": "team.role.changed", "member_id": member.id, "role": role},
        )
        return member


class CompanyService(BaseService):
    def get_company(self) -> Company:
        company = self.db.get(Company, self.context.company_id)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    def update_company(self, payload: CompanyUpdateRequest) -> Company:
        company = self.get_company()
        changes = payload.model_dump(exclude_unset=True)
        billing_fields = {"subscription_tier", "subscription_status"} & changes.keys()
        if billing_fields and not self.context.can("billing.manage"):
            raise AuthorizationError("Billing changes require billing permission.")

        if changes.get("name") is not None:
            company.name = sanitize_text(changes["name"], max_len=255)
        for field in ("industry", "website"):
            if field in changes:
                setattr(company, field, sanitize_optional(changes[field]))
        if changes.get("subscription_tier") is not None:
            company.subscription_tier = payload.subscription_tier
        if changes.get("subscription_status") is not None:
            company.subscription_status = payload.subscription_status
        self.commit()
        self.db.refresh(company)
        return company
