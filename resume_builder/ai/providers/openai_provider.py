from __future__ import annotations

import os
from typing import Optional

from openai import AsyncOpenAI

from resume_builder.core.config import settings


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        temperature: float = 0.4,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        # One attempt per enhancement; the caller falls back on failure.
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=timeout_s if timeout_s is not None else settings.ai_timeout_s,
            max_retries=0,
        )

    async def complete(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
        )
        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise RuntimeError(f"OpenAI model {self._model} returned an empty response")
        return content
