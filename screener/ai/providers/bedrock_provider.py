from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import boto3

from screener.ai.types import GenerationParams

logger = logging.getLogger(__name__)

EMPTY_OUTPUT = "{}"


def titan_request_body(prompt: str, params: GenerationParams) -> dict[str, Any]:
    return {
        "inputText": prompt,
        "textGenerationConfig": {
            "maxTokenCount": params.max_tokens,
            "temperature": params.temperature,
            "topP": params.top_p,
            "stopSequences": [],
        },
    }


def titan_output_text(payload: dict[str, Any]) -> str:
    results = payload.get("results") or []
    if not results:
        return EMPTY_OUTPUT
    text = results[0].get("outputText")
    return EMPTY_OUTPUT if text is None else str(text)


class BedrockTitanProvider:
    """Amazon Titan text models behind ``bedrock-runtime`` InvokeModel."""

    def __init__(self, client: Any, model_id: str = "amazon.titan-text-lite-v1"):
        self._client = client
        self._model_id = model_id

    @classmethod
    def from_region(cls, *, model_id: str, region: str) -> "BedrockTitanProvider":
        return cls(boto3.client("bedrock-runtime", region_name=region), model_id=model_id)

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        body = titan_request_body(prompt, params)
        response = await asyncio.to_thread(
            self._client.invoke_model,
            modelId=self._model_id,
            contentType="application/json",
            accept="application/json",
            body=json.dumps(body),
        )
        raw = response["body"].read()
        payload = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        logger.debug("bedrock_response model=%s keys=%s", self._model_id, list(payload.keys()))
        return titan_output_text(payload)
