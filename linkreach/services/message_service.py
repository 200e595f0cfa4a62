"""Message drafting, AI rewrites and mark-as-sent tracking."""

from __future__ import annotations

import logging
from datetime import datetime, time, timezone
from typing import Protocol

from linkreach.core.exceptions import ConflictError, UpstreamServiceError
from linkreach.llm.client import LLMRequest, LLMResponse
from linkreach.llm.prompts import (
    COPYWRITER_SYSTEM,
    clean_subject,
    render_improve_prompt,
    render_outreach_prompt,
    render_subject_prompt,
    render_variations_prompt,
    split_variations,
)
from linkreach.models import Campaign, Company, Message, Prospect, UserProfile
from linkreach.models.enums import CONTACTED_STATUSES, MessageType, ProspectStatus
from linkreach.schemas.messages import MessageUpdateRequest
from linkreach.services.base_service import BaseService
from linkreach.services.campaign_service import CampaignService
from linkreach.utils.validators import render_template, sanitize_optional, sanitize_text

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    def generate(self, request: LLMRequest) -> LLMResponse: ...


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MessageService(BaseService):
    def __init__(self, db, context, llm: TextGenerator | None = None) -> None:
        super().__init__(db, context)
        self.llm = llm

    def _generate(self, prompt_key: str, prompt: str, max_tokens: int, system: str | None = None) -> str:
        if self.llm is None:
            raise UpstreamServiceError("LLM client is not configured.", provider="llm")
        return self.llm.generate(
            LLMRequest(prompt_key=prompt_key, prompt=prompt, system=system, max_tokens=max_tokens)
        ).text.strip()

    def get_message(self, message_id: int) -> Message:
        return self.get_scoped(Message, message_id, "Message")

    def list_for_prospect(self, prospect: Prospect) -> list[Message]:
        return (
            self.scoped(Message)
            .filter(Message.prospect_id == prospect.id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )

    def _campaign_for(self, prospect: Prospect) -> Campaign | None:
        if prospect.campaign_id is None:
            return None
        return self.company_scoped(Campaign).filter(Campaign.id == prospect.campaign_id).first()

    def generate_for_prospect(
        self,
        prospect: Prospect,
        message_type: MessageType = MessageType.CONNECTION_REQUEST,
    ) -> tuple[Message, str | None]:
        """Draft (or redraft) outreach for ``prospect``; returns the draft row and a subject line."""
        campaign = self._campaign_for(prospect)
        if campaign is not None:
            CampaignService.assert_accepts_outreach(campaign)

        sender = self.db.get(UserProfile, self.context.user_id)
        company = self.db.get(Company, self.context.company_id)
        sender_name = sender.full_name if sender else "Sales Team"
        company_name = company.name if company else "our company"
        prospect_fields = {
            "first_name": prospect.first_name,
            "last_name": prospect.last_name,
            "full_name": prospect.full_name,
            "title": prospect.title,
            "company": prospect.company,
            "industry": prospect.industry,
            "location": prospect.location,
        }

        if campaign is not None and not campaign.ai_personalization_enabled:
            content = render_template(
                campaign.message_template,
                {**prospect_fields, "sender_name": sender_name, "company_name": company_name},
            )
            subject = f"Question about {prospect.company}" if prospect.company else None
        else:
            max_length = campaign.ai_max_length if campaign else 800
            content = self._generate(
                "outreach.message",
                render_outreach_prompt(
                    prospect_fields,
                    sender_name=sender_name,
                    company_name=company_name,
                    template=campaign.message_template if campaign else None,
                    tone=campaign.ai_tone if campaign else "professional",
                    max_length=max_length,
                ),
                max_tokens=1000,
                system=COPYWRITER_SYSTEM,
            )
            subject = self._subject_line(prospect_fields)

        draft = (
            self.company_scoped(Message)
            .filter(Message.prospect_id == prospect.id, Message.sent_at.is_(None))
            .order_by(Message.id.desc())
            .first()
        )
        if draft is None:
            draft = Message(
                company_id=self.context.company_id,
                prospect_id=prospect.id,
                campaign_id=prospect.campaign_id,
            )
            self.db.add(draft)
        draft.content = sanitize_text(content)
        draft.subject = sanitize_optional(subject, max_len=255)
        draft.variations = None
        draft.message_type = message_type.value
        draft.sent_by = self.context.user_id
        self.commit()
        self.db.refresh(draft)
        logger.info(
            "message.generated",
            extra={"event": "message.generated", "message_id": draft.id, "prospect_id": prospect.id},
        )
        return draft, draft.subject

    def _subject_line(self, prospect_fields: dict) -> str:
        fallback = f"Question about {prospect_fields.get('company') or 'your team'}"
        try:
            raw = self._generate("outreach.subject", render_subject_prompt(prospect_fields), max_tokens=50)
        except UpstreamServiceError as exc:
            logger.warning(
                "message.subject.fallback",
                extra={"event": "message.subject.fallback", "error": exc.message},
            )
            return fallback
        return clean_subject(raw) or fallback

    def improve(self, text: str, message_id: int | None = None) -> str:
        draft = self._editable(message_id) if message_id is not None else None
        improved = self._generate("outreach.improve", render_improve_prompt(sanitize_text(text)), max_tokens=512)
        if draft is not None:
            draft.content = sanitize_text(improved)
            self.commit()
        return improved

    def variations(self, text: str, count: int = 3, message_id: int | None = None) -> list[str]:
        draft = self._editable(message_id) if message_id is not None else None
        raw = self._generate(
            "outreach.variations",
            render_variations_prompt(sanitize_text(text), count=count),
            max_tokens=1500,
        )
        variations = split_variations(raw, count=count)
        if draft is not None:
            draft.variations = variations
            self.commit()
        return variations

    def update_message(self, message_id: int, payload: MessageUpdateRequest) -> Message:
        """Edit a draft's text, or record opens and replies on a sent message."""
        changes = payload.model_dump(exclude_unset=True)
        engagement = {key: changes.pop(key) for key in ("opened", "replied") if key in changes}
        message = self._editable(message_id) if changes else self.get_message(message_id)
        if changes.get("content") is not None:
            message.content = sanitize_text(changes["content"])
        if "subject" in changes:
            message.subject = sanitize_optional(changes["subject"], max_len=255)
        if "variations" in changes:
            message.variations = [sanitize_text(item) for item in changes["variations"] or [] if item.strip()] or None
        if engagement:
            self._track_engagement(message, opened=engagement.get("opened"), replied=engagement.get("replied"))
        self.commit()
        self.db.refresh(message)
        return message

    @staticmethod
    def _track_engagement(message: Message, opened: bool | None, replied: bool | None) -> None:
        if message.sent_at is None:
            raise ConflictError("Only sent messages can be marked opened or replied")
        now = _now()
        if replied is not None:
            message.replied_at = (message.replied_at or now) if replied else None
            if replied:
                # A reply implies the message was read.
                opened = True if opened is None else opened
        if opened is not None:
            message.opened_at = (message.opened_at or now) if opened else None

    def mark_sent(self, message_id: int) -> Message:
        """Record that a drafted message was sent outside the platform."""
        message = self.get_message(message_id)
        if message.sent_at is not None:
            raise ConflictError("Message has already been marked as sent")

        campaign = None
        if message.campaign_id is not None:
            campaign = self.company_scoped(Campaign).filter(Campaign.id == message.campaign_id).first()
        if campaign is not None:
            CampaignService.assert_accepts_outreach(campaign)
            self._assert_daily_limit(campaign)

        now = _now()
        message.sent_at = now
        message.sent_by = self.context.user_id
        prospect = self.company_scoped(Prospect).filter(Prospect.id == message.prospect_id).first()
        if prospect is not None:
            if prospect.status not in CONTACTED_STATUSES:
                prospect.status = ProspectStatus.CONTACTED.value
            prospect.last_contacted_at = now
        self.commit()
        self.db.refresh(message)
        logger.info(
            "message.sent",
            extra={"event": "message.sent", "message_id": message.id, "prospect_id": message.prospect_id},
        )
        return message

    def _assert_daily_limit(self, campaign: Campaign) -> None:
        day_start = datetime.combine(_now().date(), time.min, tzinfo=timezone.utc)
        sent_today = (
            self.company_scoped(Message)
            .filter(Message.campaign_id == campaign.id, Message.sent_at.is_not(None), Message.sent_at >= day_start)
            .count()
        )
        if sent_today >= campaign.daily_contact_limit:
            raise ConflictError(
                f"Daily contact limit of {campaign.daily_contact_limit} reached for this campaign",
                details={"sent_today": sent_today},
            )

    def _editable(self, message_id: int) -> Message:
        message = self.get_message(message_id)
        if message.sent_at is not None:
            raise ConflictError("Sent messages cannot be edited")
        return message
