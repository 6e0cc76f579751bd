from fastapi import APIRouter, Depends, Header, Request

from screener.core.clients import get_ingestion_handler, get_role_match_handler
from screener.core.rate_limit import trigger_rate_limit
from screener.core.security import check_api_key
from screener.schemas.events import (
    IngestionResult,
    RoleMatchResult,
    StreamEvent,
    UploadEvent,
)
from screener.services.ingestion import IngestionHandler
from screener.services.role_match import RoleMatchHandler

router = APIRouter()


@router.post("/events/uploads", response_model=IngestionResult)
@trigger_rate_limit()
async def ingest_uploads(
    request: Request,
    payload: UploadEvent,
    handler: IngestionHandler = Depends(get_ingestion_handler),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return await handler.handle(payload.records)


@router.post("/events/candidates", response_model=RoleMatchResult)
@trigger_rate_limit()
async def match_candidates(
    request: Request,
    payload: StreamEvent,
    handler: RoleMatchHandler = Depends(get_role_match_handler),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return await handler.handle(payload.records)
