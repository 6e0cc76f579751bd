from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler

from screener.api.v1.health import router as health_router
from screener.api.v1.events import router as events_router
from screener.core.observability import init_observability
from screener.core.rate_limit import limiter

init_observability()

app = FastAPI(title="Candidate Screening API", version="0.1.0")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(events_router, prefix="/v1", tags=["Events"])
