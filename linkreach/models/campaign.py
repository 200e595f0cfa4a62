"""Campaign model module."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkreach.models.base import AuditMixin, Base, CompanyScopedMixin
from linkreach.models.enums import AITone, CampaignStatus


class Campaign(Base, AuditMixin, CompanyScopedMixin):
    __tablename__ = "campaigns"
    __table_args__ = (Index("idx_campaigns_company_status", "company_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=CampaignStatus.DRAFT.value)
    target_criteria: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    message_template: Mapped[str] = mapped_column(Text, nullable=False)
    ai_personalization_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    ai_tone: Mapped[str] = mapped_column(String(20), nullable=False, default=AITone.PROFESSIONAL.value)
    ai_max_length: Mapped[int] = mapped_column(Integer, nullable=False, default=800)
    daily_contact_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
