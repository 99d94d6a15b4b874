from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
import re
import time
from functools import lru_cache
from typing import Any

import openai
from openai import OpenAI

from app.core.errors import ResumeReviewError

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_OUTPUT_TOKENS = 4000

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


@dataclass(frozen=True)
class RawAnalysisPayload:
    """Scoring-service output before normalization.

    `data` is whatever the JSON decoded to; `structured` tells whether it is
    the expected top-level object.
    """

    data: Any
    raw_text: str

    @property
    def structured(self) -> bool:
        return isinstance(self.data, dict)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("your-") or lower.startswith("replace_") or lower in {
        "changeme",
        "todo",
    }


def scoring_llm_enabled() -> bool:
    if not _env_bool("SCORING_LLM_ENABLED", True):
        return False
    provider = (os.getenv("AI_PROVIDER") or "openai").strip().lower()
    if provider != "openai":
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=float(os.getenv("SCORING_LLM_TIMEOUT_S", "300")),
        max_retries=0,
    )


def _model() -> str:
    return (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()


def _strip_code_fence(text: str) -> str:
    return _CODE_FENCE_RE.sub("", text.strip()).strip()


def _translate_openai_error(exc: Exception) -> ResumeReviewError:
    if isinstance(exc, openai.APITimeoutError):
        return ResumeReviewError("Scoring service timed out.", code="timeout")
    if isinstance(exc, openai.RateLimitError):
        return ResumeReviewError("Scoring service rate limit reached.", code="rate_limited")
    if isinstance(exc, openai.APIConnectionError):
        return ResumeReviewError("Scoring service is unreachable.", code="service_unavailable")
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return ResumeReviewError("Scoring service rejected the configured credentials.", code="service_unavailable")
    if isinstance(exc, openai.APIStatusError):
        if exc.status_code == 429:
            return ResumeReviewError("Scoring service rate limit reached.", code="rate_limited")
        if exc.status_code in {408, 504}:
            return ResumeReviewError("Scoring service timed out.", code="timeout")
        return ResumeReviewError(
            f"Scoring service returned HTTP {exc.status_code}.", code="service_unavailable"
        )
    return ResumeReviewError(f"Scoring service call failed: {exc}", code="service_unavailable")


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float = DEFAULT_TEMPERATURE,
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
) -> RawAnalysisPayload:
    """Single-attempt JSON completion against the configured scoring model.

    Raises ResumeReviewError for every failure so callers can tell an
    unconfigured service from an overloaded one.
    """
    if not scoring_llm_enabled():
        raise ResumeReviewError(
            "OpenAI API key is not configured. Please set OPENAI_API_KEY environment variable.",
            code="service_unavailable",
        )

    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(
            model=_model(),
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
            max_tokens=max_output_tokens,
        )
    except openai.OpenAIError as exc:
        error = _translate_openai_error(exc)
        logger.warning(
            "scoring_llm_failed model=%s prompt_len=%s code=%s: %s",
            _model(),
            len(user_prompt),
            error.code,
            exc,
        )
        raise error from exc

    latency_ms = int((time.perf_counter() - started) * 1000)
    content = response.choices[0].message.content if response.choices else ""
    if not content:
        logger.warning("scoring_llm_empty model=%s latency_ms=%s", _model(), latency_ms)
        raise ResumeReviewError("No response received from the scoring service.", code="malformed_response")

    text = _strip_code_fence(str(content))
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, oversized int literals and runaway nesting
        logger.warning(
            "scoring_llm_invalid_json model=%s latency_ms=%s response_len=%s: %s",
            _model(),
            latency_ms,
            len(text),
            exc,
        )
        raise ResumeReviewError(
            "Scoring service returned output that is not valid JSON.", code="malformed_response"
        ) from exc

    payload = RawAnalysisPayload(data=parsed, raw_text=text)
    logger.info(
        "scoring_llm_completed model=%s latency_ms=%s structured=%s",
        _model(),
        latency_ms,
        payload.structured,
    )
    return payload
