"""Outreach message model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkreach.models.base import AuditMixin, Base, CompanyScopedMixin
from linkreach.models.enums import MessageType


class Message(Base, AuditMixin, CompanyScopedMixin):
    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_company_sent_at", "company_id", "sent_at"),
        Index("idx_messages_prospect", "prospect_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    prospect_id: Mapped[int] = mapped_column(ForeignKey("prospects.id", ondelete="CASCADE"), nullable=False)
    campaign_id: Mapped[int | None] = mapped_column(ForeignKey("campaigns.id", ondelete="SET NULL"), nullable=True)
    subject: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    variations: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    message_type: Mapped[str] = mapped_column(String(30), nullable=False, default=MessageType.CONNECTION_REQUEST.value)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sent_by: Mapped[int | None] = mapped_column(ForeignKey("user_profiles.id", ondelete="SET NULL"), nullable=True)
    opened_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    replied_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_draft(self) -> bool:
        return self.sent_at is None
