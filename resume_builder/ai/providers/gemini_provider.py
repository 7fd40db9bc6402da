from __future__ import annotations

import os
from typing import Optional

from google import genai


class GeminiProvider:
    def __init__(self, model: str, api_key: Optional[str] = None):
        self._model = model
        key = (api_key or os.getenv("GEMINI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")

        self._client = genai.Client(api_key=key)

    async def complete(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
        )
        text = response.text
        if not text:
            raise RuntimeError(f"Gemini model {self._model} returned an empty response")
        return text
