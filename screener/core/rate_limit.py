from __future__ import annotations

import hashlib

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from screener.core.config import settings


def trigger_caller_key(request: Request) -> str:
    """Bucket webhook callers by API key; many of them share one egress IP."""
    api_key = request.headers.get("x-api-key", "").strip()
    if api_key:
        return "key:" + hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:16]
    return "ip:" + get_remote_address(request)


limiter = Limiter(key_func=trigger_caller_key, enabled=settings.rate_limit_enabled)


def trigger_rate_limit():
    return limiter.limit(settings.rate_limit)
