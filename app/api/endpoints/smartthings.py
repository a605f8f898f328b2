from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging

from app.core.deps import get_smartthings_service
from app.schemas.rooms import ErrorResponse, SnapshotResponse
from app.services.smartthings_service import SmartThingsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/snapshot",
    response_model=SnapshotResponse,
    response_model_by_alias=True,
    responses={500: {"model": ErrorResponse}}
)
async def get_snapshot(smartthings: SmartThingsService = Depends(get_smartthings_service)):
    """Diagnostic device listing from the cloud registry, without status"""
    try:
        outcome = await smartthings.fetch_snapshot()

        if not outcome.ok:
            failure = outcome.failure
            logger.error(f"Snapshot unavailable: {failure.kind.value} - {failure.message}")
            return JSONResponse(status_code=failure.http_status, content=failure.to_payload())

        return SnapshotResponse(devices=outcome.data, fetched_at=datetime.now(timezone.utc))

    except Exception as e:
        logger.error(f"Snapshot error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)}
        )
