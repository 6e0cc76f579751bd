from __future__ import annotations

import logging

import sentry_sdk

from screener.core.config import settings

_configured = False


def init_observability() -> None:
    """Configure root logging and Sentry once per process."""
    global _configured
    if _configured:
        return

    logging.basicConfig(level=settings.log_level, format="%(message)s")
    # Lambda installs its own root handler before our code runs.
    logging.getLogger().setLevel(settings.log_level)
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn)
    _configured = True


def preview(text: str | None, max_chars: int | None = None) -> str:
    if not text:
        return ""
    limit = settings.log_text_max_chars if max_chars is None else max_chars
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... (truncated, total {len(text)} chars)"
