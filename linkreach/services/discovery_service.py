"""Two-phase prospect discovery: search, then bulk-enrich a bounded prefix.

Phase 1 asks the people-search provider for up to ``limit`` people matching a
campaign's target criteria. Phase 2 reveals contact details for the first
``enrich_limit`` of them, in sequential batches with a pause in between. The
merged result keeps phase-1 order and length; an enriched record only
contributes its contact fields to its phase-1 counterpart.

Search failures are fatal. A failed enrichment batch is logged and skipped, so
its people simply stay unenriched.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from linkreach.core.exceptions import UpstreamServiceError, ValidationError
from linkreach.integrations.people_search import SearchCriteria
from linkreach.integrations.records import PersonRecord, merge_enrichment
from linkreach.schemas.discovery import ProspectCandidate

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50
DEFAULT_ENRICH_LIMIT = 10
ENRICH_BATCH_SIZE = 10
ENRICH_BATCH_DELAY_SECONDS = 0.5


class PeopleSearchAdapter(Protocol):
    def search(self, criteria: SearchCriteria) -> list[PersonRecord]: ...

    def enrich(self, ids: list[str]) -> list[PersonRecord]: ...


@dataclass(frozen=True)
class DiscoveryCriteria:
    titles: list[str] = field(default_factory=list)
    industries: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    limit: int = DEFAULT_SEARCH_LIMIT
    enrich_limit: int = DEFAULT_ENRICH_LIMIT

    @classmethod
    def from_target_criteria(
        cls,
        target_criteria: dict | None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        enrich_limit: int = DEFAULT_ENRICH_LIMIT,
    ) -> "DiscoveryCriteria":
        raw = target_criteria if isinstance(target_criteria, dict) else {}

        def _strings(key: str) -> list[str]:
            values = raw.get(key)
            if not isinstance(values, list):
                return []
            return [str(value).strip() for value in values if str(value).strip()]

        return cls(
            titles=_strings("titles"),
            industries=_strings("industries"),
            locations=_strings("locations"),
            keywords=_strings("keywords"),
            limit=limit,
            enrich_limit=enrich_limit,
        )

    def search_criteria(self) -> SearchCriteria:
        return SearchCriteria(
            titles=self.titles,
            industries=self.industries,
            locations=self.locations,
            keywords=self.keywords,
            limit=self.limit,
        )


@dataclass
class DiscoveryResult:
    candidates: list[ProspectCandidate]
    searched: int = 0
    enriched_ids: list[str] = field(default_factory=list)
    enriched_found: int = 0
    failed_batches: int = 0


def to_candidate(record: PersonRecord) -> ProspectCandidate:
    organization = record.organization
    return ProspectCandidate(
        name=record.display_name,
        title=record.title,
        company=organization.name if organization else None,
        location=record.location or None,
        profile_url=record.linkedin_url,
        headline=record.headline or record.title,
        photo_url=record.photo_url,
        email=record.best_email,
        phone=record.best_phone,
        industry=organization.industry if organization else None,
        external_id=record.id,
    )


def chunked(items: list[str], size: int) -> list[list[str]]:
    return [items[start : start + size] for start in range(0, len(items), size)]


class DiscoveryService:
    def __init__(
        self,
        people_search: PeopleSearchAdapter,
        batch_size: int = ENRICH_BATCH_SIZE,
        batch_delay_seconds: float = ENRICH_BATCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.people_search = people_search
        self.batch_size = batch_size
        self.batch_delay_seconds = batch_delay_seconds
        self.sleep = sleep

    def discover(self, criteria: DiscoveryCriteria) -> DiscoveryResult:
        if criteria.limit < 1:
            raise ValidationError("limit must be >= 1")
        if criteria.enrich_limit < 0:
            raise ValidationError("enrichLimit must be >= 0")

        people = self.people_search.search(criteria.search_criteria())[: criteria.limit]
        if not people:
            logger.info("discovery.search.empty", extra={"event": "discovery.search.empty"})
            return DiscoveryResult(candidates=[])

        ids = [person.id for person in people if person.id][: criteria.enrich_limit]
        enriched, failed_batches = self._enrich(ids)

        merged = [
            to_candidate(merge_enrichment(person, enriched[person.id]) if person.id in enriched else person)
            for person in people
        ]
        logger.info(
            "discovery.completed",
            extra={
                "event": "discovery.completed",
                "searched": len(people),
                "enrich_requested": len(ids),
                "enriched": len(enriched),
                "failed_batches": failed_batches,
            },
        )
        return DiscoveryResult(
            candidates=merged,
            searched=len(people),
            enriched_ids=ids,
            enriched_found=len(enriched),
            failed_batches=failed_batches,
        )

    def _enrich(self, ids: list[str]) -> tuple[dict[str, PersonRecord], int]:
        enriched: dict[str, PersonRecord] = {}
        failed_batches = 0
        requested = set(ids)
        for index, batch in enumerate(chunked(ids, self.batch_size)):
            if index > 0 and self.batch_delay_seconds > 0:
                self.sleep(self.batch_delay_seconds)
            try:
                records = self.people_search.enrich(batch)
            except UpstreamServiceError as exc:
                failed_batches += 1
                logger.warning(
                    "discovery.enrich.batch_failed",
                    extra={
                        "event": "discovery.enrich.batch_failed",
                        "batch_index": index,
                        "batch_size": len(batch),
                        "error": exc.message,
                        "details": exc.details,
                    },
                )
                continue
            for record in records:
                # Only ids we asked for may replace phase-1 records.
                if record.id in requested:
                    enriched[record.id] = record
        return enriched, failed_batches
