from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from typing import List
import logging

from app.core.deps import get_rooms_aggregator
from app.schemas.rooms import ErrorResponse, RoomDevice
from app.services.room_service import RoomService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/rooms",
    response_model=List[RoomDevice],
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}
)
async def get_rooms(room_service: RoomService = Depends(get_rooms_aggregator)):
    """Normalized device list from the first usable provider"""
    try:
        outcome = await room_service.get_rooms()

        if not outcome.ok:
            failure = outcome.failure
            logger.error(f"Rooms unavailable: {failure.kind.value} - {failure.message}")
            return JSONResponse(status_code=failure.http_status, content=failure.to_payload())

        return JSONResponse(content=[device.to_payload() for device in outcome.data])

    except Exception as e:
        logger.error(f"Rooms aggregation error: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)}
        )
