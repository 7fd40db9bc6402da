from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    rate_limit_enabled: bool
    generate_rate_limit: str
    resume_dir: str
    resume_retention: int
    pdf_format: str
    pdf_border: str
    pdf_timeout_s: float
    ai_timeout_s: float


settings = Settings(
    host=_get_env("HOST", "0.0.0.0") or "0.0.0.0",
    port=_get_env_int("PORT", 3000),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    generate_rate_limit=_get_env("GENERATE_RATE_LIMIT", "50 per 15 minutes") or "50 per 15 minutes",
    resume_dir=_get_env("RESUME_DIR", "resumes") or "resumes",
    resume_retention=max(1, _get_env_int("RESUME_RETENTION", 5)),
    pdf_format=_get_env("PDF_FORMAT", "Letter") or "Letter",
    pdf_border=_get_env("PDF_BORDER", "10mm") or "10mm",
    pdf_timeout_s=_get_env_float("PDF_TIMEOUT_S", 30.0),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 20.0),
)

if settings.port <= 0 or settings.port > 65535:
    raise RuntimeError("PORT must be between 1 and 65535.")
