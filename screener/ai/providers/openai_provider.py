from __future__ import annotations

import os
from typing import Optional

from openai import AsyncOpenAI

from screener.ai.types import GenerationParams


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 2,
        client: AsyncOpenAI | None = None,
    ):
        self._model = model
        if client is not None:
            self._client = client
            return

        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=float(os.getenv("OPENAI_TIMEOUT_S", str(timeout_s))),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", str(max_retries))),
        )

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=params.temperature,
            top_p=params.top_p,
            max_tokens=params.max_tokens,
        )
        content = response.choices[0].message.content if response.choices else ""
        return str(content or "{}")


def from_env() -> OpenAIProvider:
    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is missing")

    model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
    base_url = os.getenv("OPENAI_BASE_URL", "").strip() or None

    timeout_s = float(os.getenv("OPENAI_TIMEOUT_S", "30"))
    max_retries = int(os.getenv("OPENAI_MAX_RETRIES", "2"))

    return OpenAIProvider(
        api_key=api_key,
        model=model,
        base_url=base_url,
        timeout_s=timeout_s,
        max_retries=max_retries,
    )
