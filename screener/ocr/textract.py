from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

JOB_IN_PROGRESS = "IN_PROGRESS"
JOB_SUCCEEDED = "SUCCEEDED"

Sleep = Callable[[float], Awaitable[Any]]


class OcrJobFailedError(RuntimeError):
    def __init__(self, message: str, *, response: dict[str, Any] | None = None):
        super().__init__(message)
        self.response = response or {}


def lines_from_blocks(blocks: list[dict[str, Any]] | None) -> list[str]:
    return [
        block["Text"]
        for block in blocks or []
        if block.get("BlockType") == "LINE" and block.get("Text")
    ]


class TextractExtractor:
    """Turns documents into newline-joined text lines through Amazon Textract.

    ``client`` is a boto3 ``textract`` client (or anything exposing the same
    methods). Its calls block, so they run in a worker thread.

    Two modes are supported:

    * ``sync`` sends one ``DetectDocumentText`` request, for single-page
      images and small documents.
    * ``async`` starts a ``StartDocumentTextDetection`` job and polls it every
      ``poll_interval_s`` seconds until it leaves ``IN_PROGRESS``, then drains
      every result page. There is no poll limit; the caller's own timeout is
      the only bound.
    """

    def __init__(
        self,
        client: Any,
        *,
        mode: str = "sync",
        poll_interval_s: float = 2.0,
        sleep: Sleep = asyncio.sleep,
    ):
        if mode not in {"sync", "async"}:
            raise ValueError(f"Unsupported OCR mode '{mode}'")
        self._client = client
        self._mode = mode
        self._poll_interval_s = poll_interval_s
        self._sleep = sleep

    @property
    def mode(self) -> str:
        return self._mode

    async def extract_text(self, bucket: str, key: str) -> str:
        if self._mode == "async":
            return await self.extract_text_async(bucket, key)
        return await self.detect_text(bucket=bucket, key=key)

    async def detect_text(
        self,
        *,
        bucket: str | None = None,
        key: str | None = None,
        content: bytes | None = None,
    ) -> str:
        has_location = bool(bucket and key)
        if has_location == (content is not None):
            raise ValueError("Provide either bucket and key, or content bytes.")

        if content is not None:
            document: dict[str, Any] = {"Bytes": content}
        else:
            document = {"S3Object": {"Bucket": bucket, "Name": key}}

        response = await asyncio.to_thread(self._client.detect_document_text, Document=document)
        return "\n".join(lines_from_blocks(response.get("Blocks")))

    async def extract_text_async(self, bucket: str, key: str) -> str:
        started = await asyncio.to_thread(
            self._client.start_document_text_detection,
            DocumentLocation={"S3Object": {"Bucket": bucket, "Name": key}},
        )
        job_id = started["JobId"]
        logger.info("textract_job_started job_id=%s location=s3://%s/%s", job_id, bucket, key)

        response = await self._wait_for_job(job_id)
        pages = [response]
        next_token = response.get("NextToken")
        while next_token:
            response = await asyncio.to_thread(
                self._client.get_document_text_detection,
                JobId=job_id,
                NextToken=next_token,
            )
            pages.append(response)
            next_token = response.get("NextToken")

        logger.info("textract_job_collected job_id=%s pages=%s", job_id, len(pages))
        return "\n".join("\n".join(lines_from_blocks(page.get("Blocks"))) for page in pages)

    async def _wait_for_job(self, job_id: str) -> dict[str, Any]:
        while True:
            response = await asyncio.to_thread(self._client.get_document_text_detection, JobId=job_id)
            status = response.get("JobStatus")
            if status != JOB_IN_PROGRESS:
                break
            logger.debug("textract_job_pending job_id=%s", job_id)
            await self._sleep(self._poll_interval_s)

        if status != JOB_SUCCEEDED:
            raise OcrJobFailedError(
                f"Textract job {job_id} finished with status {status}",
                response=response,
            )
        return response
