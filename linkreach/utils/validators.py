"""Deterministic validators and sanitizers for user-supplied content."""

from __future__ import annotations

import re

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_]*)\s*\}\}")


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def sanitize_optional(value: str | None, max_len: int = 20000) -> str | None:
    cleaned = sanitize_text(value, max_len=max_len)
    return cleaned or None


def split_full_name(full_name: str | None) -> tuple[str, str]:
    """Split "Jane van Doe" into ("Jane", "van Doe")."""
    parts = sanitize_text(full_name).split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def is_linkedin_profile_url(url: str | None) -> bool:
    return bool(url) and "linkedin.com/in/" in str(url)


def render_template(template: str, values: dict[str, str | None]) -> str:
    """Fill ``{{placeholder}}`` tokens; unknown placeholders render empty."""

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1)) or ""

    return PLACEHOLDER_PATTERN.sub(_replace, template or "").strip()
