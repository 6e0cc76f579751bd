from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, TypeVar

from screener.core.clients import get_ingestion_handler, get_role_match_handler
from screener.core.observability import init_observability
from screener.schemas.events import StreamEvent, UploadEvent

T = TypeVar("T")

init_observability()
logger = logging.getLogger(__name__)

# Warm containers reuse cached clients, so they also reuse one loop.
_loop = asyncio.new_event_loop()


def _run(coro: Coroutine[Any, Any, T]) -> T:
    return _loop.run_until_complete(coro)


def ingest_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    batch = UploadEvent.model_validate(event or {})
    logger.info("ingest_event_received records=%s", len(batch.records))
    if not batch.records:
        logger.info("ingest_event_empty")
        return {"statusCode": 200, "body": "No records"}

    result = _run(get_ingestion_handler().handle(batch.records))
    logger.info("ingest_event_done saved=%s failed=%s", len(result.saved), len(result.failed))
    return {"statusCode": 200, "body": "OK"}


def role_match_handler(event: dict[str, Any], context: Any = None) -> None:
    batch = StreamEvent.model_validate(event or {})
    logger.info("role_match_event_received records=%s", len(batch.records))
    if not batch.records:
        return None

    result = _run(get_role_match_handler().handle(batch.records))
    logger.info(
        "role_match_event_done evaluated=%s skipped=%s failed=%s",
        result.evaluated,
        result.skipped,
        result.failed,
    )
    return None
