from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum
import math


class DeviceType(str, Enum):
    """Dashboard device classification"""
    AC = "ac"
    PURIFIER = "purifier"
    DEVICE = "device"


class RoomDevice(BaseModel):
    """Canonical device record served to the dashboard.

    Optional status fields left as ``None`` are omitted from the JSON
    output, so the dashboard sees them as absent rather than ``null``.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(..., min_length=1, description="Upstream device or entity identifier")
    type: DeviceType = DeviceType.DEVICE
    name: str = ""
    room: str = ""
    power: Optional[bool] = None
    mode: Optional[str] = None
    temp_set: Optional[float] = Field(None, alias="tempSet", description="Target temperature")
    temp_cur: Optional[float] = Field(None, alias="tempCur", description="Measured temperature")
    updated_at: datetime = Field(..., alias="updatedAt")

    @field_validator("temp_set", "temp_cur")
    @classmethod
    def validate_temperature(cls, v):
        if v is not None and not math.isfinite(v):
            raise ValueError("Temperature must be a finite number")
        return v

    def to_payload(self) -> dict:
        """Serialize with camelCase keys and absent optional fields"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DeviceSnapshot(BaseModel):
    """Lightweight cloud registry listing entry (no status)"""
    id: str
    name: Optional[str] = None
    room: str = ""
    type: str = "device"


class SnapshotResponse(BaseModel):
    """Diagnostic device listing"""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    devices: List[DeviceSnapshot] = []
    fetched_at: datetime = Field(..., alias="fetchedAt")


class PingResponse(BaseModel):
    ok: bool = True
    at: datetime


class ProviderStatus(BaseModel):
    hub: bool
    smartthings: bool


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    providers: ProviderStatus


class ErrorResponse(BaseModel):
    """Error payload returned by every failing /api route"""
    error: str
    detail: Optional[str] = None
