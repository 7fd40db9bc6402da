from __future__ import annotations

import asyncio
import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Mapping

from resume_builder.ai.types import AIClient, Category
from resume_builder.normalize.utils import non_blank_lines

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\[.*?\]")
_HEDGE_RE = re.compile(r"\b(?:optional|e\.g\.|quantifiable).*?\.", re.IGNORECASE)
_BULLET_MARKER_RE = re.compile(r"^\s*-\s*")


@dataclass(frozen=True)
class EnhancementFailure:
    category: Category
    reason: str


@dataclass(frozen=True)
class EnhancementResult:
    points: list[str] = field(default_factory=list)
    failure: EnhancementFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def build_prompt(text: str, context: Mapping[str, Any] | None, category: Category) -> str:
    ctx = context or {}
    if category == "experience":
        return (
            "Generate 3 concise, professional bullet points for this work experience:\n"
            f"Position: {ctx.get('position', '')} at {ctx.get('company', '')}\n"
            f"Description: {text}\n\n"
            "Guidelines:\n"
            "- Begin each bullet with a strong action verb\n"
            "- Mention specific tools, technologies, or methodologies used\n"
            "- Focus on tangible outcomes or contributions\n"
            "- Do not include placeholders or vague percentages\n"
            "- Each bullet should be a single, impactful sentence (max 20 words)"
        )
    if category == "project":
        return (
            "Generate exactly 3 professional and effective bullet points for the following project:\n"
            f"Title: {ctx.get('title', '')}\n"
            f"Description: {text}\n\n"
            "Guidelines:\n"
            "- Clearly state the objective or purpose of the project\n"
            "- Highlight specific tools, frameworks, or technologies used\n"
            "- Emphasize key achievements or real-world results\n"
            "- No placeholders, no vague terms, no speculative language\n"
            "- Each point should be direct, formal, and suitable for a resume (max 20 words)"
        )
    return (
        "Rewrite the following text into 2 polished, concise, and professional sentences "
        f"without placeholders or vague terms: {text}"
    )


def clean_generated_text(raw: str) -> list[str]:
    text = _PLACEHOLDER_RE.sub("", raw)
    text = _HEDGE_RE.sub("", text)
    return [_BULLET_MARKER_RE.sub("", line).strip() for line in text.split("\n") if line.strip()]


def fallback_points(text: str, category: Category) -> list[str]:
    if category in ("experience", "project"):
        return non_blank_lines(text)
    return [text]


class ContentEnhancer:
    """Rewrites user-authored text through a completion client.

    ``try_enhance`` reports failures as values. ``enhance`` maps them to the
    original text, so neither method raises.
    """

    def __init__(self, client: AIClient | None, *, timeout_s: float = 20.0):
        self._client = client
        self._timeout_s = timeout_s

    async def try_enhance(
        self,
        text: str,
        context: Mapping[str, Any] | None,
        category: Category,
    ) -> EnhancementResult:
        if self._client is None:
            return EnhancementResult(failure=EnhancementFailure(category, "completion client not configured"))

        prompt = build_prompt(text, context, category)
        started = time.perf_counter()
        try:
            raw = await asyncio.wait_for(self._client.complete(prompt), timeout=self._timeout_s)
        except asyncio.TimeoutError:
            return EnhancementResult(
                failure=EnhancementFailure(category, f"timed out after {self._timeout_s:g}s")
            )
        except Exception as exc:  # noqa: BLE001 - fallback to submitted text is expected
            return EnhancementResult(failure=EnhancementFailure(category, f"{type(exc).__name__}: {exc}"))

        points = clean_generated_text(raw or "")
        if not points:
            return EnhancementResult(failure=EnhancementFailure(category, "empty response after cleanup"))
        logger.debug(
            "enhancement_ok category=%s points=%s latency_ms=%s",
            category,
            len(points),
            int((time.perf_counter() - started) * 1000),
        )
        return EnhancementResult(points=points)

    async def enhance(
        self,
        text: str,
        context: Mapping[str, Any] | None,
        category: Category,
    ) -> list[str]:
        result = await self.try_enhance(text, context, category)
        if result.ok:
            return result.points
        logger.warning(
            "enhancement_failed category=%s text_len=%s: %s",
            category,
            len(text),
            result.failure.reason,
        )
        return fallback_points(text, category)
