from __future__ import annotations

import logging
from typing import Any

from screener.schemas.events import RoleMatchResult, StreamRecord
from screener.services.fit_evaluator import RoleFitEvaluator
from screener.store.candidates import FIT_ATTRIBUTE, CandidateStore, deserialize_image

logger = logging.getLogger(__name__)


def _record_label(raw: Any, index: int) -> str:
    if isinstance(raw, dict) and raw.get("eventID"):
        return f"event_id={raw['eventID']}"
    return f"record[{index}]"


class RoleMatchHandler:
    """Scores newly inserted candidates against the configured role."""

    def __init__(self, evaluator: RoleFitEvaluator, store: CandidateStore, role_description: str):
        self._evaluator = evaluator
        self._store = store
        self._role_description = role_description

    async def handle(self, records: list[Any]) -> RoleMatchResult:
        result = RoleMatchResult()
        for index, raw in enumerate(records):
            label = _record_label(raw, index)
            try:
                image = self._new_image(raw)
                candidate_id = image.get("candidateId")
                if candidate_id:
                    label = f"candidate_id={candidate_id}"
                if await self._process(image):
                    result.evaluated += 1
                else:
                    result.skipped += 1
            except Exception as exc:  # noqa: BLE001 - keep the rest of the batch moving
                logger.exception("role_match_failed %s: %s", label, exc)
                result.failed += 1
        return result

    @staticmethod
    def _new_image(raw: Any) -> dict[str, Any]:
        """Plain values of an inserted row, or an empty dict for other changes."""
        record = StreamRecord.model_validate(raw)
        if not record.is_insert:
            return {}
        return deserialize_image(record.dynamodb.new_image)

    async def _process(self, image: dict[str, Any]) -> bool:
        candidate_id = image.get("candidateId")
        raw_text = image.get("rawText")
        if not candidate_id or not raw_text:
            logger.info("role_match_skipped reason=missing_fields_or_not_insert")
            return False

        # Snapshot check only; two overlapping invocations can both get past it.
        if FIT_ATTRIBUTE in image:
            logger.info("role_match_skipped reason=already_scored candidate_id=%s", candidate_id)
            return False

        logger.info("role_match_evaluating candidate_id=%s", candidate_id)
        assessment = await self._evaluator.evaluate(raw_text, self._role_description)
        logger.info(
            "role_match_scored candidate_id=%s fit_score=%s level=%s",
            candidate_id,
            assessment.fit_score,
            assessment.recommended_level,
        )
        await self._store.update_fit(candidate_id, assessment)
        return True
