"""Prospect model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from linkreach.models.base import AuditMixin, Base, CompanyScopedMixin
from linkreach.models.enums import ProspectStatus


class Prospect(Base, AuditMixin, CompanyScopedMixin):
    __tablename__ = "prospects"
    __table_args__ = (
        UniqueConstraint("campaign_id", "linkedin_url", name="uq_prospects_campaign_linkedin_url"),
        Index("idx_prospects_company_status", "company_id", "status"),
        Index("idx_prospects_company_assignee", "company_id", "assigned_to"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    campaign_id: Mapped[int | None] = mapped_column(ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True, index=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    external_contact_id: Mapped[str | None] = mapped_column(String(120), nullable=True)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(120), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(60), nullable=True)
    headline: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=ProspectStatus.NEW.value)
    assigned_to: Mapped[int | None] = mapped_column(ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True)
    last_contacted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
