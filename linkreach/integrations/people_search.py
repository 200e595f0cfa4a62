"""People-search and bulk-enrichment adapter (Apollo-style API)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from linkreach.core.config import Config, get_config
from linkreach.core.exceptions import UpstreamServiceError
from linkreach.integrations.records import PersonRecord, parse_people

logger = logging.getLogger(__name__)

PROVIDER = "people_search"
MAX_PAGE_SIZE = 100

US_STATES: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "DC": "District of Columbia",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois",
    "IN": "Indiana", "IA": "Iowa", "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana",
    "ME": "Maine", "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota",
    "MS": "Mississippi", "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma", "OR": "Oregon",
    "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina", "SD": "South Dakota",
    "TN": "Tennessee", "TX": "Texas", "UT": "Utah", "VT": "Vermont", "VA": "Virginia",
    "WA": "Washington", "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
}

_US_ALIASES = {"us", "usa", "u.s.", "u.s.a.", "united states", "united states of america"}

# Country names that already qualify a location and must not get ", US" appended.
_KNOWN_COUNTRIES = {
    "canada", "mexico", "united kingdom", "uk", "england", "scotland", "ireland", "germany",
    "france", "spain", "italy", "netherlands", "belgium", "switzerland", "austria", "sweden",
    "norway", "denmark", "finland", "poland", "portugal", "india", "china", "japan",
    "singapore", "australia", "new zealand", "brazil", "argentina", "israel",
    "united arab emirates", "south africa",
}


def normalize_location(raw: str) -> str:
    """Qualify a free-form location the way the provider expects.

    ``"Richmond, VA"`` becomes ``"Richmond, Virginia, US"``; ``"Austin, USA"``
    becomes ``"Austin, US"``; a location already naming another country is kept.
    """
    parts = [part.strip() for part in raw.split(",") if part.strip()]
    if not parts:
        return ""

    expanded = [US_STATES.get(part, part) if len(part) == 2 and part.isupper() else part for part in parts]
    last = expanded[-1].lower()
    if last in _US_ALIASES:
        expanded[-1] = "US"
    elif last not in _KNOWN_COUNTRIES:
        expanded.append("US")
    return ", ".join(expanded)


@dataclass(frozen=True)
class SearchCriteria:
    titles: list[str] = field(default_factory=list)
    industries: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    limit: int = 50

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"page": 1, "per_page": max(1, min(self.limit, MAX_PAGE_SIZE))}
        if self.titles:
            payload["person_titles"] = list(self.titles)
        if self.locations:
            payload["person_locations"] = [loc for loc in map(normalize_location, self.locations) if loc]
        if self.industries:
            payload["q_organization_keyword_tags"] = list(self.industries)
        if self.keywords:
            payload["q_keywords"] = " ".join(self.keywords)
        return payload


class PeopleSearchClient:
    """Thin client over the search and bulk-match endpoints.

    No retries: any transport, auth, rate-limit or payload failure surfaces as
    ``UpstreamServiceError`` with the provider's message in ``details``.
    """

    def __init__(self, config: Config | None = None) -> None:
        cfg = config or get_config()
        self.api_key = cfg.APOLLO_API_KEY
        self.base_url = cfg.APOLLO_API_URL.rstrip("/")
        self.timeout = cfg.PEOPLE_SEARCH_TIMEOUT_SECONDS

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise UpstreamServiceError("People search API key is not configured.", provider=PROVIDER)
        headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-cache",
            "X-Api-Key": self.api_key,
        }
        try:
            response = requests.post(f"{self.base_url}{path}", json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise UpstreamServiceError("People search request failed.", provider=PROVIDER, details=str(exc)) from exc

        if response.status_code >= 400:
            raise UpstreamServiceError(
                f"People search API error: {response.status_code}",
                provider=PROVIDER,
                details=_error_detail(response),
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamServiceError("People search returned invalid JSON.", provider=PROVIDER) from exc
        if not isinstance(body, dict):
            raise UpstreamServiceError("People search returned an unexpected payload.", provider=PROVIDER)
        return body

    def search(self, criteria: SearchCriteria) -> list[PersonRecord]:
        """Phase-1 search; contact fields are typically locked in these results."""
        body = self._post("/mixed_people/search", criteria.to_payload())
        people = parse_people(body.get("people"))[: criteria.limit]
        logger.info(
            "people_search.search.completed",
            extra={"event": "people_search.search.completed", "results": len(people)},
        )
        return people

    def enrich(self, ids: list[str]) -> list[PersonRecord]:
        """Reveal contact details for one batch of external ids."""
        if not ids:
            return []
        payload = {"reveal_personal_emails": True, "details": [{"id": person_id} for person_id in ids]}
        body = self._post("/people/bulk_match", payload)
        return [record for record in parse_people(body.get("matches")) if record.id]


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if body.get(key):
                return str(body[key])
    return response.text[:500]
