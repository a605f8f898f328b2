from .rooms import (
    DeviceType, RoomDevice, DeviceSnapshot, SnapshotResponse,
    PingResponse, ProviderStatus, HealthResponse, ErrorResponse
)

__all__ = [
    "DeviceType", "RoomDevice", "DeviceSnapshot", "SnapshotResponse",
    "PingResponse", "ProviderStatus", "HealthResponse", "ErrorResponse"
]
