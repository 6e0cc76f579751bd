from __future__ import annotations

from functools import lru_cache
from typing import Any

import boto3

from screener.ai.config import load_model_config
from screener.ai.factory import get_model_client
from screener.core.config import settings
from screener.ocr.textract import TextractExtractor
from screener.services.fit_evaluator import RoleFitEvaluator
from screener.services.ingestion import IngestionHandler
from screener.services.role_match import RoleMatchHandler
from screener.store.candidates import CandidateStore


@lru_cache(maxsize=1)
def _textract() -> Any:
    return boto3.client("textract", region_name=settings.aws_region)


@lru_cache(maxsize=1)
def _dynamodb() -> Any:
    return boto3.client("dynamodb", region_name=settings.aws_region)


@lru_cache(maxsize=1)
def get_candidate_store() -> CandidateStore:
    return CandidateStore(_dynamodb(), settings.table_name)


@lru_cache(maxsize=1)
def get_ingestion_handler() -> IngestionHandler:
    extractor = TextractExtractor(
        _textract(),
        mode=settings.ocr_mode,
        poll_interval_s=settings.ocr_poll_interval_s,
    )
    return IngestionHandler(extractor, get_candidate_store())


@lru_cache(maxsize=1)
def get_role_match_handler() -> RoleMatchHandler:
    cfg = load_model_config()
    evaluator = RoleFitEvaluator(get_model_client(cfg), cfg.params)
    return RoleMatchHandler(evaluator, get_candidate_store(), settings.role_description)
