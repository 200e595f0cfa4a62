"""LinkedIn profile scraping adapter (ScrapingDog-style API)."""

from __future__ import annotations

import logging
import re
from typing import Any

import requests
from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

from linkreach.core.config import Config, get_config
from linkreach.core.exceptions import UpstreamServiceError, ValidationError

logger = logging.getLogger(__name__)

PROVIDER = "profile_scraper"
PROFILE_URL_MARKER = "linkedin.com/in/"

_COMPANY_PATTERN = re.compile(r"\s+at\s+(.+?)(?:\s+\||$)", re.IGNORECASE)
_TITLE_PATTERN = re.compile(r"^(.+?)\s+at\s+", re.IGNORECASE)


class LinkedInProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    full_name: str = Field(default="", alias="fullName")
    headline: str = ""
    location: str = ""
    company: str = ""
    title: str = ""
    industry: str = ""
    profile_url: str = Field(alias="profileUrl")
    photo_url: str = Field(default="", alias="photoUrl")
    summary: str = ""


def company_from_headline(headline: str | None) -> str:
    if not headline:
        return ""
    match = _COMPANY_PATTERN.search(headline)
    return match.group(1).strip() if match else ""


def title_from_headline(headline: str | None) -> str:
    if not headline:
        return ""
    match = _TITLE_PATTERN.search(headline)
    return match.group(1).strip() if match else headline


def _text(data: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def profile_from_json(data: dict[str, Any], profile_url: str) -> LinkedInProfile:
    first_name = _text(data, "firstName", "first_name")
    last_name = _text(data, "lastName", "last_name")
    headline = _text(data, "headline", "title")
    return LinkedInProfile(
        first_name=first_name,
        last_name=last_name,
        full_name=_text(data, "fullName", "full_name", "name") or f"{first_name} {last_name}".strip(),
        headline=headline,
        location=_text(data, "location"),
        company=_text(data, "company") or company_from_headline(headline),
        title=_text(data, "title") or title_from_headline(headline),
        industry=_text(data, "industry"),
        profile_url=profile_url,
        photo_url=_text(data, "photoUrl", "profilePicture", "profile_photo"),
        summary=_text(data, "summary", "about"),
    )


def profile_from_html(html: str, profile_url: str) -> LinkedInProfile:
    """Fallback for providers that hand back the rendered public profile page."""
    soup = BeautifulSoup(html, "html.parser")

    def meta(prop: str) -> str:
        tag = soup.find("meta", attrs={"property": prop}) or soup.find("meta", attrs={"name": prop})
        return tag.get("content", "").strip() if tag else ""

    title_text = meta("og:title") or (soup.title.get_text(strip=True) if soup.title else "")
    # "Jane Doe - VP Sales at Acme | LinkedIn"
    title_text = title_text.split("|", 1)[0].strip()
    name, _, headline = (part.strip() for part in title_text.partition(" - "))
    first_name, _, last_name = name.partition(" ")
    return LinkedInProfile(
        first_name=first_name,
        last_name=last_name,
        full_name=name,
        headline=headline,
        company=company_from_headline(headline),
        title=title_from_headline(headline),
        profile_url=profile_url,
        photo_url=meta("og:image"),
        summary=meta("og:description") or meta("description"),
    )


class ProfileScraperClient:
    def __init__(self, config: Config | None = None) -> None:
        cfg = config or get_config()
        self.api_key = cfg.SCRAPINGDOG_API_KEY
        self.base_url = cfg.SCRAPINGDOG_API_URL
        self.timeout = cfg.SCRAPE_TIMEOUT_SECONDS

    def scrape_profile(self, profile_url: str) -> LinkedInProfile:
        if not profile_url or PROFILE_URL_MARKER not in profile_url:
            raise ValidationError("Invalid LinkedIn profile URL")
        if not self.api_key:
            raise UpstreamServiceError("Profile scraper API key is not configured.", provider=PROVIDER)

        params = {"api_key": self.api_key, "url": profile_url, "field": "profile"}
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise UpstreamServiceError("Failed to scrape LinkedIn profile", provider=PROVIDER, details=str(exc)) from exc

        if response.status_code >= 400:
            raise UpstreamServiceError(
                "Failed to scrape LinkedIn profile",
                provider=PROVIDER,
                details=response.text[:500] or f"HTTP {response.status_code}",
            )

        content_type = response.headers.get("Content-Type", "")
        if "html" in content_type:
            profile = profile_from_html(response.text, profile_url)
        else:
            try:
                body = response.json()
            except ValueError as exc:
                raise UpstreamServiceError("Profile scraper returned invalid JSON.", provider=PROVIDER) from exc
            if isinstance(body, list):
                body = body[0] if body and isinstance(body[0], dict) else {}
            if not isinstance(body, dict) or not body:
                raise UpstreamServiceError("No data returned from profile scraper.", provider=PROVIDER)
            profile = profile_from_json(body, profile_url)

        logger.info(
            "profile_scraper.scrape.completed",
            extra={"event": "profile_scraper.scrape.completed", "has_company": bool(profile.company)},
        )
        return profile
