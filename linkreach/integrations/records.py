"""Typed records for people-data provider payloads.

Provider JSON is loosely shaped: fields go missing, nested objects turn up as
strings, lists turn up as ``None``. Everything is validated here, at the
adapter boundary, and wrong-typed values collapse to ``None`` or ``[]`` so the
discovery code never inspects raw dictionaries.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

LOCKED_EMAIL_MARKER = "email_not_unlocked"


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    return None


def _list_or_empty(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


class PhoneNumberRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    raw_number: str | None = None
    sanitized_number: str | None = None

    @field_validator("raw_number", "sanitized_number", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @property
    def number(self) -> str | None:
        return self.raw_number or self.sanitized_number


class OrganizationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    industry: str | None = None
    website_url: str | None = None

    @field_validator("name", "industry", "website_url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _text_or_none(value)


class PersonRecord(BaseModel):
    """One person as returned by either the search or the enrichment endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    headline: str | None = None
    linkedin_url: str | None = None
    photo_url: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    email: str | None = None
    personal_emails: list[str] = []
    phone: str | None = None
    phone_numbers: list[PhoneNumberRecord] = []
    organization: OrganizationRecord | None = None

    @field_validator(
        "id",
        "name",
        "first_name",
        "last_name",
        "title",
        "headline",
        "linkedin_url",
        "photo_url",
        "city",
        "state",
        "country",
        "email",
        "phone",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("personal_emails", mode="before")
    @classmethod
    def _coerce_emails(cls, value: Any) -> list[str]:
        return [item for item in (_text_or_none(v) for v in _list_or_empty(value)) if item]

    @field_validator("phone_numbers", mode="before")
    @classmethod
    def _coerce_phones(cls, value: Any) -> list[dict[str, Any]]:
        return [item for item in _list_or_empty(value) if isinstance(item, dict)]

    @field_validator("organization", mode="before")
    @classmethod
    def _coerce_organization(cls, value: Any) -> dict[str, Any] | None:
        return value if isinstance(value, dict) else None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def location(self) -> str:
        return ", ".join(part for part in (self.city, self.state, self.country) if part)

    @property
    def best_email(self) -> str | None:
        """Direct email unless missing or locked, then the first personal email, else absent."""
        if self.email and LOCKED_EMAIL_MARKER not in self.email.lower():
            return self.email
        if self.personal_emails:
            return self.personal_emails[0]
        return None

    @property
    def best_phone(self) -> str | None:
        if self.phone:
            return self.phone
        for entry in self.phone_numbers:
            if entry.number:
                return entry.number
        return None


def parse_people(items: Any) -> list[PersonRecord]:
    """Validate a provider list; non-object entries are dropped."""
    return [PersonRecord.model_validate(item) for item in _list_or_empty(items) if isinstance(item, dict)]


def merge_enrichment(base: PersonRecord, enriched: PersonRecord) -> PersonRecord:
    """Overlay the contact fields of ``enriched`` onto a phase-1 ``base`` record.

    Identity fields (name, title, profile URL, location) always come from
    ``base``; contact fields and industry come from ``enriched`` when it has them.
    """
    base_org = base.organization or OrganizationRecord()
    enriched_org = enriched.organization or OrganizationRecord()
    organization = OrganizationRecord(
        name=base_org.name or enriched_org.name,
        industry=enriched_org.industry or base_org.industry,
        website_url=base_org.website_url or enriched_org.website_url,
    )
    return base.model_copy(
        update={
            "email": enriched.email if (enriched.email or enriched.personal_emails) else base.email,
            "personal_emails": enriched.personal_emails or base.personal_emails,
            "phone": enriched.phone or base.phone,
            "phone_numbers": enriched.phone_numbers or base.phone_numbers,
            "organization": organization if (organization.name or organization.industry) else None,
        }
    )
