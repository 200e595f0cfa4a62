"""Prospect CRUD, assignment and bulk insert of discovered candidates."""

from __future__ import annotations

import logging


from linkreach.core.exceptions import AuthorizationError, ConflictError, ValidationError
from linkreach.models import Campaign, Prospect, UserProfile
from linkreach.models.enums import ProspectStatus
from linkreach.schemas.discovery import ProspectCandidate
from linkreach.schemas.prospects import ProspectCreateRequest, ProspectUpdateRequest
from linkreach.services.base_service import BaseService
from linkreach.utils.validators import sanitize_optional, sanitize_text, split_full_name

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "company", "industry", "location", "email", "phone", "headline", "notes")


class ProspectService(BaseService):
    def list_prospects(
        self,
        campaign_id: int | None = None,
        status: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[Prospect], int]:
        query = self.scoped(Prospect)
        if campaign_id is not None:
            query = query.filter(Prospect.campaign_id == campaign_id)
        if status:
            query = query.filter(Prospect.status == status)
        total = query.count()
        rows = (
            query.order_by(Prospect.created_at.desc(), Prospect.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return rows, total

    def get_prospect(self, prospect_id: int) -> Prospect:
        return self.get_scoped(Prospect, prospect_id, "Prospect")

    def create_prospect(self, payload: ProspectCreateRequest) -> Prospect:
        if payload.campaign_id is not None:
            self._require_campaign(payload.campaign_id)
        linkedin_url = sanitize_text(payload.linkedin_url, max_len=500)
        if self._exists(payload.campaign_id, linkedin_url):
            raise ConflictError("Prospect already exists in this campaign")

        first_name = sanitize_text(payload.first_name, max_len=120)
        last_name = sanitize_text(payload.last_name, max_len=120)
        prospect = Prospect(
            company_id=self.context.company_id,
            campaign_id=payload.campaign_id,
            linkedin_url=linkedin_url,
            first_name=first_name,
            last_name=last_name,
            full_name=f"{first_name} {last_name}".strip(),
            status=ProspectStatus.NEW.value,
            assigned_to=self._resolve_assignee(payload.assigned_to),
            **{field: sanitize_optional(getattr(payload, field)) for field in _TEXT_FIELDS},
        )
        self.db.add(prospect)
        self.commit(conflict="Prospect already exists in this campaign")
        self.db.refresh(prospect)
        return prospect

    def update_prospect(self, prospect_id: int, payload: ProspectUpdateRequest) -> Prospect:
        prospect = self.get_prospect(prospect_id)
        changes = payload.model_dump(exclude_unset=True)

        if "assigned_to" in changes:
            if not self.context.can("prospects.assign"):
                raise AuthorizationError("Only admins and managers can reassign prospects.")
            prospect.assigned_to = self._resolve_assignee(changes.pop("assigned_to"))
        if "campaign_id" in changes:
            campaign_id = changes.pop("campaign_id")
            if campaign_id is not None:
                self._require_campaign(campaign_id)
                if prospect.linkedin_url and campaign_id != prospect.campaign_id and self._exists(
                    campaign_id, prospect.linkedin_url
                ):
                    raise ConflictError("Prospect already exists in this campaign")
            prospect.campaign_id = campaign_id
        if changes.get("status") is not None:
            prospect.status = ProspectStatus(changes.pop("status")).value

        for field in ("first_name", "last_name"):
            if changes.get(field) is not None:
                setattr(prospect, field, sanitize_text(changes[field], max_len=120))
        for field in _TEXT_FIELDS:
            if field in changes:
                setattr(prospect, field, sanitize_optional(changes[field]))
        prospect.full_name = f"{prospect.first_name} {prospect.last_name}".strip()

        self.commit()
        self.db.refresh(prospect)
        return prospect

    def delete_prospect(self, prospect_id: int) -> None:
        prospect = self.get_prospect(prospect_id)
        self.db.delete(prospect)
        self.commit()

    def add_candidates(self, campaign: Campaign, candidates: list[ProspectCandidate]) -> tuple[list[Prospect], int]:
        """Insert discovered candidates into ``campaign`` as new prospects.

        Candidates whose profile URL already exists in the campaign, or repeats
        within the batch, are skipped and counted.
        """
        existing = {
            url
            for (url,) in self.db.query(Prospect.linkedin_url)
            .filter(Prospect.campaign_id == campaign.id, Prospect.linkedin_url.is_not(None))
            .all()
        }
        assignee = None if self.context.can("prospects.view_all") else self.context.user_id

        created: list[Prospect] = []
        skipped = 0
        for candidate in candidates:
            url = sanitize_optional(candidate.profile_url, max_len=500)
            if url and url in existing:
                skipped += 1
                continue
            first_name, last_name = split_full_name(candidate.name)
            if not first_name:
                raise ValidationError("Every prospect needs a name")
            prospect = Prospect(
                company_id=self.context.company_id,
                campaign_id=campaign.id,
                linkedin_url=url,
                external_contact_id=sanitize_optional(candidate.external_id, max_len=120),
                first_name=first_name,
                last_name=last_name,
                full_name=sanitize_text(candidate.name, max_len=255),
                title=sanitize_optional(candidate.title),
                company=sanitize_optional(candidate.company),
                industry=sanitize_optional(candidate.industry),
                location=sanitize_optional(candidate.location),
                email=sanitize_optional(candidate.email),
                phone=sanitize_optional(candidate.phone),
                headline=sanitize_optional(candidate.headline),
                status=ProspectStatus.NEW.value,
                assigned_to=assignee,
            )
            self.db.add(prospect)
            created.append(prospect)
            if url:
                existing.add(url)

        if not created:
            raise ConflictError("All prospects already exist in this campaign")
        self.commit(conflict="Some prospects already exist in this campaign")
        for prospect in created:
            self.db.refresh(prospect)
        logger.info(
            "prospects.bulk_added",
            extra={
                "event": "prospects.bulk_added",
                "campaign_id": campaign.id,
                "created": len(created),
                "skipped": skipped,
            },
        )
        return created, skipped

    def _exists(self, campaign_id: int | None, linkedin_url: str) -> bool:
        query = self.company_scoped(Prospect).filter(Prospect.linkedin_url == linkedin_url)
        if campaign_id is None:
            query = query.filter(Prospect.campaign_id.is_(None))
        else:
            query = query.filter(Prospect.campaign_id == campaign_id)
        return query.first() is not None

    def _require_campaign(self, campaign_id: int) -> Campaign:
        return self.get_scoped(Campaign, campaign_id, "Campaign", company_only=True)

    def _resolve_assignee(self, assigned_to: int | None) -> int | None:
        """Reps always own what they create; leadership may assign anyone in the company."""
        if not self.context.can("prospects.assign"):
            if assigned_to not in (None, self.context.user_id):
                raise AuthorizationError("Only admins and managers can assign prospects to others.")
            return self.context.user_id
        if assigned_to is None:
            return None
        member = self.company_scoped(UserProfile).filter(UserProfile.id == assigned_to).first()
        if member is None:
            raise ValidationError("assigned_to must reference a member of your company")
        return member.id
