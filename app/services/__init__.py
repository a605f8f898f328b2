from .hub_service import HubService
from .smartthings_service import SmartThingsService
from .room_service import RoomService, get_room_service

__all__ = [
    "HubService", "SmartThingsService",
    "RoomService", "get_room_service"
]
