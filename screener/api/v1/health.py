from fastapi import APIRouter

from screener.core.config import settings

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report whether the pipeline is configured to run.")
async def health_check():
    table_configured = bool(settings.table_name)
    return {
        "status": "healthy" if table_configured else "degraded",
        "table_configured": table_configured,
        "ocr_mode": settings.ocr_mode,
        "model_provider": settings.model_provider,
    }
