from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    table_name: str | None
    aws_region: str | None
    bedrock_region: str
    role_description: str
    model_provider: str
    bedrock_model_id: str
    model_max_tokens: int
    model_temperature: float
    model_top_p: float
    ocr_mode: str
    ocr_poll_interval_s: float
    log_level: str
    log_text_max_chars: int
    sentry_dsn: str | None
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool


def load_settings() -> Settings:
    aws_region = _get_env("AWS_REGION")
    return Settings(
        table_name=_get_env("TABLE_NAME"),
        aws_region=aws_region,
        bedrock_region=_get_env("BEDROCK_REGION", aws_region or "ap-south-1") or "ap-south-1",
        role_description=_get_env("ROLE_DESCRIPTION", "Generic Software Engineer") or "Generic Software Engineer",
        model_provider=(_get_env("MODEL_PROVIDER", "bedrock") or "bedrock").strip().lower(),
        bedrock_model_id=_get_env("BEDROCK_MODEL_ID", "amazon.titan-text-lite-v1") or "amazon.titan-text-lite-v1",
        model_max_tokens=_get_env_int("MODEL_MAX_TOKENS", 512),
        model_temperature=_get_env_float("MODEL_TEMPERATURE", 0.2),
        model_top_p=_get_env_float("MODEL_TOP_P", 0.9),
        ocr_mode=(_get_env("OCR_MODE", "sync") or "sync").strip().lower(),
        ocr_poll_interval_s=_get_env_float("OCR_POLL_INTERVAL_S", 2.0),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        log_text_max_chars=_get_env_int("LOG_TEXT_MAX_CHARS", 800),
        sentry_dsn=_get_env("SENTRY_DSN"),
        api_key=_get_env("API_KEY"),
        rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    )


def validate_settings(value: Settings) -> Settings:
    if value.ocr_mode not in {"sync", "async"}:
        raise RuntimeError("OCR_MODE must be either 'sync' or 'async'.")

    if value.model_provider not in {"bedrock", "openai"}:
        raise RuntimeError("MODEL_PROVIDER must be either 'bedrock' or 'openai'.")

    if value.ocr_poll_interval_s < 0:
        raise RuntimeError("OCR_POLL_INTERVAL_S must not be negative.")
    return value


settings = validate_settings(load_settings())
