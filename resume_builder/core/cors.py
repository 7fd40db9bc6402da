from __future__ import annotations

from resume_builder.core.config import settings


def cors_allowed_origins() -> list[str]:
    return list(settings.cors_allowed_origins)


def cors_allow_credentials() -> bool:
    return "*" not in settings.cors_allowed_origins
