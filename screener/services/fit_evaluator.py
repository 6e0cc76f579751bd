from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from screener.ai.types import GenerationParams, ModelClient
from screener.core.observability import preview
from screener.schemas.candidate import FitAssessment

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

_PROMPT_TEMPLATE = """
You are an expert technical recruiter.

Analyze the following candidate resume text and determine how well they fit the given job role.

ROLE DESCRIPTION:
{role_description}

RESUME TEXT:
{resume_text}

You MUST respond with ONLY a single line of valid JSON.
Do not add any extra text, explanation, or markdown.

The JSON schema is:

{{
  "fitScore": number between 0 and 100,
  "summary": string,
  "keyStrengths": [string],
  "concerns": [string],
  "skillsMatched": [string],
  "skillsMissing": [string],
  "recommendedLevel": "Junior | Mid | Senior | Lead | Principal"
}}
"""


def build_fit_prompt(resume_text: str, role_description: str) -> str:
    return _PROMPT_TEMPLATE.format(role_description=role_description, resume_text=resume_text)


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if not cleaned.startswith("```"):
        return cleaned
    return _FENCE_RE.sub("", cleaned).strip()


def parse_fit_assessment(text: str) -> FitAssessment:
    """Parse model output into a FitAssessment; malformed output becomes a fallback, never an error."""
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
        return FitAssessment.model_validate(parsed)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("fit_response_unparseable error=%s raw=%s", type(exc).__name__, preview(cleaned))
        return FitAssessment.fallback(cleaned)


class RoleFitEvaluator:
    def __init__(self, model: ModelClient, params: GenerationParams | None = None):
        self._model = model
        self._params = params or GenerationParams()

    async def evaluate(self, resume_text: str, role_description: str) -> FitAssessment:
        prompt = build_fit_prompt(resume_text, role_description)
        output = await self._model.generate(prompt, self._params)
        logger.debug("fit_response_received chars=%s raw=%s", len(output), preview(output))
        return parse_fit_assessment(output)
