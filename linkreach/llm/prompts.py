"""Prompt builders for outreach copy and analytics summaries."""

from __future__ import annotations

import json
from typing import Any

TONE_DESCRIPTIONS = {
    "professional": "Professional and business-focused, formal yet friendly",
    "casual": "Casual and approachable, conversational and relaxed",
    "enthusiastic": "Enthusiastic and energetic, showing excitement and passion",
    "educational": "Educational and helpful, informative and value-focused",
}

VARIATION_SEPARATOR = "---"

COPYWRITER_SYSTEM = (
    "You are an expert B2B sales copywriter specializing in LinkedIn outreach. "
    "Messages feel authentic and conversational, reference the prospect's role and company, "
    "and end with an easy-to-answer question or soft call-to-action. "
    'Never use generic phrases like "I came across your profile".'
)


def render_outreach_prompt(
    prospect: dict[str, Any],
    sender_name: str,
    company_name: str,
    template: str | None,
    tone: str,
    max_length: int,
) -> str:
    tone_description = TONE_DESCRIPTIONS.get(tone, TONE_DESCRIPTIONS["professional"])
    first_name = prospect.get("first_name") or "there"
    lines = [
        "Write a personalized cold outreach message to:",
        "",
        f"Prospect: {prospect.get('full_name') or first_name}",
        f"Title: {prospect.get('title') or 'Professional'}",
        f"Company: {prospect.get('company') or 'their company'}",
        f"Industry: {prospect.get('industry') or 'their industry'}",
        f"Location: {prospect.get('location') or 'Not specified'}",
        "",
        f"Your company: {company_name}",
        f"Your name: {sender_name}",
        "",
    ]
    if template:
        lines += ["Use this template as inspiration (but personalize it heavily):", template, ""]
    lines += [
        "Requirements:",
        f"- Keep the message body STRICTLY under {max_length} characters",
        f"- Tone: {tone_description}",
        "- Reference their specific role and company",
        "- Sound natural and conversational, not robotic",
        "- Include a clear, soft call-to-action",
        "",
        f'Write ONLY the message body, no subject line. Start with "Hi {first_name}," and end with a signature.',
    ]
    return "\n".join(lines)


def render_subject_prompt(prospect: dict[str, Any]) -> str:
    return (
        "Generate a compelling subject line for a cold outreach to "
        f"{prospect.get('full_name') or prospect.get('first_name') or 'a prospect'}, "
        f"{prospect.get('title') or 'a professional'} at {prospect.get('company') or 'their company'}.\n\n"
        "Requirements:\n"
        "- Under 50 characters\n"
        "- Curiosity-inducing but not clickbait\n"
        "- Personalized (mention their company or role)\n\n"
        "Generate ONLY the subject line, no quotes or explanation."
    )


def render_improve_prompt(message: str) -> str:
    return (
        "Improve this LinkedIn message:\n\n"
        f'"{message}"\n\n'
        "Make it:\n"
        "- More concise and punchy\n"
        "- More engaging and personalized\n"
        "- Professional but approachable\n"
        "- End with a compelling question or CTA\n\n"
        "Return only the improved message, nothing else."
    )


def render_variations_prompt(message: str, count: int = 3) -> str:
    return (
        f"Generate {count} variations of this message. Each variation should:\n"
        "- Have a different opening hook\n"
        "- Maintain the same core value proposition\n"
        "- Be equally concise and engaging\n\n"
        f'Original message:\n"{message}"\n\n'
        f'Return ONLY the {count} variations, separated by "{VARIATION_SEPARATOR}" on new lines. '
        "No numbering or extra text."
    )


def render_insights_prompt(analytics_data: dict[str, Any]) -> str:
    return (
        "You are an expert sales analytics consultant. Analyze this sales automation data "
        "and provide actionable insights.\n\n"
        f"DATA:\n{json.dumps(analytics_data, indent=2, default=str)}\n\n"
        "Provide a concise analysis with:\n"
        "1. Key Wins (2-3 bullet points)\n"
        "2. Areas for Improvement (2-3 bullet points)\n"
        "3. Recommended Actions (3-4 bullet points)\n"
        "4. Campaign Insights: which campaigns perform best/worst and why\n\n"
        "Be direct and data-driven."
    )


def split_variations(text: str, count: int = 3) -> list[str]:
    parts = [part.strip() for part in text.split(VARIATION_SEPARATOR)]
    return [part for part in parts if part][:count]


def clean_subject(text: str) -> str:
    return text.strip().strip("\"'").strip()
