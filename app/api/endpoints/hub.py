from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
import logging

from app.core.deps import get_hub_service
from app.core.errors import UpstreamError
from app.schemas.rooms import ErrorResponse
from app.services.hub_service import HubService
from app.services.outcomes import failure_from_error

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/raw", responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})
async def get_raw_state(hub: HubService = Depends(get_hub_service)):
    """Passthrough of the configured hub entity's raw state"""
    if not hub.is_configured:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "hub not configured (HA_BASE_URL, HA_TOKEN, HA_ENTITY_ID)"}
        )

    try:
        return await hub.fetch_raw_state()
    except UpstreamError as e:
        failure = failure_from_error(e, "hub state fetch failed")
        logger.error(f"Raw hub state error: {failure.message}")
        return JSONResponse(status_code=failure.http_status, content=failure.to_payload())
