from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from app.core.config import Settings
from app.core.deps import get_settings
from app.schemas.rooms import HealthResponse, PingResponse, ProviderStatus

router = APIRouter()


@router.get("/ping", response_model=PingResponse)
async def ping():
    """Liveness check"""
    return PingResponse(ok=True, at=datetime.now(timezone.utc))


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Service health with provider enablement"""
    return HealthResponse(
        service=settings.APP_NAME,
        version=settings.VERSION,
        providers=ProviderStatus(
            hub=settings.hub_configured,
            smartthings=settings.smartthings_configured
        )
    )
