from __future__ import annotations

from dataclasses import replace

import pytest

from linkreach.core.config import get_config
from linkreach.core.exceptions import UpstreamServiceError, ValidationError
from linkreach.integrations import profile_scraper
from linkreach.integrations.profile_scraper import (
    ProfileScraperClient,
    company_from_headline,
    profile_from_html,
    profile_from_json,
    title_from_headline,
)

PROFILE_URL = "https://www.linkedin.com/in/ann-lee"


class _Response:
    def __init__(self, body=None, text="", content_type="application/json", status_code=200):
        self._body = body
        self.text = text
        self.headers = {"Content-Type": content_type}
        self.status_code = status_code

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


def _client(api_key="scrape-key"):
    return ProfileScraperClient(replace(get_config(), SCRAPINGDOG_API_KEY=api_key))


def test_headline_parsing():
    assert company_from_headline("VP Sales at Acme Corp | Speaker") == "Acme Corp"
    assert title_from_headline("VP Sales at Acme Corp") == "VP Sales"
    assert company_from_headline("Founder") == ""
    assert title_from_headline("Founder") == "Founder"
    assert title_from_headline(None) == ""


def test_profile_from_json_derives_company_from_headline():
    profile = profile_from_json({"firstName": "Ann", "lastName": "Lee", "headline": "CTO at Initech"}, PROFILE_URL)
    assert profile.full_name == "Ann Lee"
    assert profile.company == "Initech"
    assert profile.title == "CTO"
    assert profile.model_dump(by_alias=True)["profileUrl"] == PROFILE_URL


def test_profile_from_html_reads_open_graph_tags():
    html = (
        "<html><head>"
        '<meta property="og:title" content="Ann Lee - VP Sales at Acme | LinkedIn">'
        '<meta property="og:image" content="https://img.test/ann.jpg">'
        '<meta property="og:description" content="Building revenue teams.">'
        "</head></html>"
    )
    profile = profile_from_html(html, PROFILE_URL)
    assert profile.first_name == "Ann"
    assert profile.last_name == "Lee"
    assert profile.headline == "VP Sales at Acme"
    assert profile.company == "Acme"
    assert profile.title == "VP Sales"
    assert profile.photo_url == "https://img.test/ann.jpg"
    assert profile.summary == "Building revenue teams."


def test_scrape_rejects_non_profile_urls(monkeypatch):
    monkeypatch.setattr(profile_scraper.requests, "get", lambda *args, **kwargs: pytest.fail("unexpected call"))
    with pytest.raises(ValidationError):
        _client().scrape_profile("https://www.linkedin.com/company/acme")


def test_scrape_uses_first_element_of_list_payload(monkeypatch):
    calls = []

    def fake_get(url, params, timeout):
        calls.append(params)
        return _Response(body=[{"fullName": "Ann Lee", "headline": "CTO at Initech", "location": "Denver"}])

    monkeypatch.setattr(profile_scraper.requests, "get", fake_get)
    profile = _client().scrape_profile(PROFILE_URL)

    assert calls[0] == {"api_key": "scrape-key", "url": PROFILE_URL, "field": "profile"}
    assert profile.full_name == "Ann Lee"
    assert profile.company == "Initech"
    assert profile.location == "Denver"


def test_scrape_parses_html_responses(monkeypatch):
    html = '<html><head><title>Bo Chen - Founder at Hooli | LinkedIn</title></head></html>'
    monkeypatch.setattr(
        profile_scraper.requests,
        "get",
        lambda *args, **kwargs: _Response(text=html, content_type="text/html; charset=utf-8"),
    )
    profile = _client().scrape_profile(PROFILE_URL)
    assert profile.full_name == "Bo Chen"
    assert profile.company == "Hooli"


def test_scrape_empty_payload_is_upstream_error(monkeypatch):
    monkeypatch.setattr(profile_scraper.requests, "get", lambda *args, **kwargs: _Response(body=[]))
    with pytest.raises(UpstreamServiceError, match="No data"):
        _client().scrape_profile(PROFILE_URL)


def test_scrape_requires_api_key():
    with pytest.raises(UpstreamServiceError, match="not configured"):
        _client(api_key=None).scrape_profile(PROFILE_URL)
