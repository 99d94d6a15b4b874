from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

load_dotenv()

T = TypeVar("T")

_TRUTHY = {"1", "true", "yes", "y", "on"}

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_raw(name: str) -> str | None:
    value = os.getenv(name)
    return value if value else None


def _env_parsed(name: str, default: T, parse: Callable[[str], T]) -> T:
    raw = _env_raw(name)
    if raw is None:
        return default
    try:
        return parse(raw.strip())
    except ValueError:
        return default


def _parse_bool(raw: str) -> bool:
    return raw.lower() in _TRUTHY


def _parse_csv(raw: str) -> tuple[str, ...]:
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    if not items:
        raise ValueError("empty list")
    return items


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    max_upload_mb: int
    min_resume_chars: int
    min_extracted_chars: int
    min_quick_score: int
    analysis_timeout_s: float

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=_env_raw("API_KEY"),
            rate_limit=_env_raw("RATE_LIMIT") or "20/minute",
            rate_limit_enabled=_env_parsed("RATE_LIMIT_ENABLED", True, _parse_bool),
            log_level=(_env_raw("LOG_LEVEL") or "INFO").upper(),
            sentry_dsn=_env_raw("SENTRY_DSN"),
            cors_allowed_origins=_env_parsed("CORS_ALLOWED_ORIGINS", DEFAULT_CORS_ORIGINS, _parse_csv),
            cors_allow_origin_regex=_env_raw("CORS_ALLOW_ORIGIN_REGEX"),
            cors_allow_credentials=_env_parsed("CORS_ALLOW_CREDENTIALS", False, _parse_bool),
            max_upload_mb=_env_parsed("MAX_UPLOAD_MB", 10, int),
            min_resume_chars=_env_parsed("MIN_RESUME_CHARS", 100, int),
            min_extracted_chars=_env_parsed("MIN_EXTRACTED_CHARS", 50, int),
            min_quick_score=_env_parsed("MIN_QUICK_SCORE", 20, int),
            analysis_timeout_s=_env_parsed("ANALYSIS_TIMEOUT_S", 300.0, float),
        )


settings = Settings.from_env()

if settings.max_upload_mb <= 0:
    raise RuntimeError("MAX_UPLOAD_MB must be a positive integer.")

if settings.analysis_timeout_s <= 0:
    raise RuntimeError("ANALYSIS_TIMEOUT_S must be greater than zero.")

__all__ = ["Settings", "settings"]
