"""LLM client contracts and the hosted Messages API adapter."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from time import perf_counter

import requests

from linkreach.core.config import Config, get_config
from linkreach.core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)

PROVIDER = "llm"


@dataclass(frozen=True)
class LLMRequest:
    prompt_key: str
    prompt: str
    system: str | None = None
    max_tokens: int = 1024


@dataclass(frozen=True)
class LLMResponse:
    text: str
    model_name: str
    prompt_hash: str
    latency_ms: int
    generated_at: str


class LLMClient:
    """Single-shot text generation; no retries, failures raise ``UpstreamServiceError``."""

    def __init__(self, config: Config | None = None) -> None:
        cfg = config or get_config()
        self.api_key = cfg.ANTHROPIC_API_KEY
        self.url = f"{cfg.ANTHROPIC_API_URL.rstrip('/')}/v1/messages"
        self.api_version = cfg.ANTHROPIC_VERSION
        self.model = cfg.LLM_MODEL
        self.timeout = cfg.LLM_TIMEOUT_SECONDS

    def generate(self, request: LLMRequest) -> LLMResponse:
        if not self.api_key:
            raise UpstreamServiceError("LLM API key is not configured.", provider=PROVIDER)

        payload: dict = {
            "model": self.model,
            "max_tokens": request.max_tokens,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system:
            payload["system"] = request.system
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }

        started = perf_counter()
        try:
            response = requests.post(self.url, json=payload, headers=headers, timeout=(5, self.timeout))
        except requests.exceptions.RequestException as exc:
            logger.warning(
                "llm.call.failed",
                extra={"event": "llm.call.failed", "prompt_key": request.prompt_key, "error": str(exc)},
            )
            raise UpstreamServiceError("LLM request failed.", provider=PROVIDER, details=str(exc)) from exc

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.warning(
                "llm.call.rejected",
                extra={
                    "event": "llm.call.rejected",
                    "prompt_key": request.prompt_key,
                    "status_code": response.status_code,
                    "error": detail,
                },
            )
            raise UpstreamServiceError(f"LLM API error: {response.status_code}", provider=PROVIDER, details=detail)

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamServiceError("LLM returned invalid JSON.", provider=PROVIDER) from exc
        text = _first_text_block(body)
        if text is None:
            raise UpstreamServiceError("Unexpected response format from LLM API.", provider=PROVIDER)

        latency_ms = int((perf_counter() - started) * 1000)
        logger.info(
            "llm.call.completed",
            extra={"event": "llm.call.completed", "prompt_key": request.prompt_key, "latency_ms": latency_ms},
        )
        return LLMResponse(
            text=text.strip(),
            model_name=str(body.get("model") or self.model),
            prompt_hash=hashlib.sha256(request.prompt.encode("utf-8")).hexdigest(),
            latency_ms=latency_ms,
            generated_at=datetime.now(timezone.utc).isoformat(),
        )


def _first_text_block(body: object) -> str | None:
    if not isinstance(body, dict):
        return None
    for block in body.get("content") or []:
        if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str):
            return block["text"]
    return None


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text[:500]
