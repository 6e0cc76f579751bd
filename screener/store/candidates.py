from __future__ import annotations

import asyncio
import logging
from typing import Any

from boto3.dynamodb.types import TypeDeserializer

from screener.schemas.candidate import CandidateRecord, FitAssessment

logger = logging.getLogger(__name__)

FIT_ATTRIBUTE = "aiFit"
_deserializer = TypeDeserializer()


class CandidateStoreError(RuntimeError):
    pass


def candidate_item(record: CandidateRecord) -> dict[str, dict[str, Any]]:
    item: dict[str, dict[str, Any]] = {
        "candidateId": {"S": record.candidate_id},
        "bucket": {"S": record.bucket},
        "fileKey": {"S": record.file_key},
        "rawText": {"S": record.raw_text},
    }
    if record.name:
        item["name"] = {"S": record.name}
    if record.email:
        item["email"] = {"S": record.email}
    if record.phone:
        item["phone"] = {"S": record.phone}
    # DynamoDB rejects empty sets.
    if record.skills:
        item["skills"] = {"SS": list(record.skills)}
    return item


def deserialize_image(image: dict[str, Any] | None) -> dict[str, Any]:
    """Turn a stream image in attribute-value form into plain Python values."""
    if not image:
        return {}
    return {name: _deserializer.deserialize(value) for name, value in image.items()}


class CandidateStore:
    def __init__(self, client: Any, table_name: str | None):
        self._client = client
        self._table_name = table_name

    def _table(self) -> str:
        if not self._table_name:
            raise CandidateStoreError("TABLE_NAME is not configured.")
        return self._table_name

    async def put_candidate(self, record: CandidateRecord) -> None:
        await asyncio.to_thread(
            self._client.put_item,
            TableName=self._table(),
            Item=candidate_item(record),
        )
        logger.info("candidate_saved candidate_id=%s", record.candidate_id)

    async def update_fit(self, candidate_id: str, assessment: FitAssessment) -> None:
        # Plain SET: a concurrent evaluation of the same row wins last.
        await asyncio.to_thread(
            self._client.update_item,
            TableName=self._table(),
            Key={"candidateId": {"S": candidate_id}},
            UpdateExpression=f"SET {FIT_ATTRIBUTE} = :fit",
            ExpressionAttributeValues={":fit": {"S": assessment.to_json()}},
        )
        logger.info("candidate_fit_saved candidate_id=%s", candidate_id)
