from __future__ import annotations

import logging
import uuid
from typing import Any, Callable

from screener.ocr.textract import TextractExtractor
from screener.parsing.fields import parse_candidate_fields
from screener.schemas.candidate import CandidateRecord
from screener.schemas.events import IngestionResult, S3EventRecord
from screener.store.candidates import CandidateStore

logger = logging.getLogger(__name__)


def new_candidate_id() -> str:
    return str(uuid.uuid4())


class IngestionHandler:
    """Upload notifications in, one candidate row per readable document out."""

    def __init__(
        self,
        extractor: TextractExtractor,
        store: CandidateStore,
        *,
        id_factory: Callable[[], str] = new_candidate_id,
    ):
        self._extractor = extractor
        self._store = store
        self._id_factory = id_factory

    async def process_record(self, record: S3EventRecord) -> CandidateRecord:
        text = await self._extractor.extract_text(record.bucket, record.key)
        logger.info("text_extracted location=%s chars=%s", record.location, len(text))

        fields = parse_candidate_fields(text)
        candidate = CandidateRecord(
            candidate_id=self._id_factory(),
            bucket=record.bucket,
            file_key=record.key,
            raw_text=text,
            **fields.model_dump(),
        )
        logger.info(
            "candidate_parsed candidate_id=%s name=%s skills=%s",
            candidate.candidate_id,
            candidate.name,
            candidate.skills,
        )

        await self._store.put_candidate(candidate)
        return candidate

    async def handle(self, records: list[Any]) -> IngestionResult:
        result = IngestionResult()
        for index, raw in enumerate(records):
            location = f"record[{index}]"
            try:
                record = S3EventRecord.model_validate(raw)
                location = record.location
                logger.info("processing_upload location=%s", location)
                candidate = await self.process_record(record)
                result.saved.append(candidate.candidate_id)
            except Exception as exc:  # noqa: BLE001 - one bad upload must not stop the batch
                logger.exception("upload_processing_failed location=%s: %s", location, exc)
                result.failed.append(location)
        return result
