from fastapi import Depends, HTTPException, Request, status
import aiohttp
import logging

from app.core.config import Settings
from app.services.hub_service import HubService
from app.services.room_service import RoomService, get_room_service
from app.services.smartthings_service import SmartThingsService

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Settings object the application was started with"""
    return request.app.state.settings


def get_http_session(request: Request) -> aiohttp.ClientSession:
    """Process-wide outbound HTTP session opened in the lifespan handler"""
    session = getattr(request.app.state, "http_session", None)
    if session is None:
        logger.error("Outbound HTTP session requested before startup")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up"
        )
    return session


def get_hub_service(
    settings: Settings = Depends(get_settings),
    session: aiohttp.ClientSession = Depends(get_http_session)
) -> HubService:
    return HubService(settings, session)


def get_smartthings_service(
    settings: Settings = Depends(get_settings),
    session: aiohttp.ClientSession = Depends(get_http_session)
) -> SmartThingsService:
    return SmartThingsService(settings, session)


def get_rooms_aggregator(
    hub: HubService = Depends(get_hub_service),
    smartthings: SmartThingsService = Depends(get_smartthings_service)
) -> RoomService:
    return get_room_service(hub, smartthings)
