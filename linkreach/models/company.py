"""Company (tenant) model module."""

from __future__ import annotations

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from linkreach.models.base import AuditMixin, Base
from linkreach.models.enums import SubscriptionStatus, SubscriptionTier


class Company(Base, AuditMixin):
    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    industry: Mapped[str | None] = mapped_column(String(120), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        Enum(SubscriptionTier, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=SubscriptionTier.STARTER,
        nullable=False,
    )
    subscription_status: Mapped[SubscriptionStatus] = mapped_column(
        Enum(SubscriptionStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=SubscriptionStatus.TRIAL,
        nullable=False,
    )
