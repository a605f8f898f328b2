import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List
from urllib.parse import quote

import aiohttp

from app.core.config import Settings
from app.core.errors import MalformedResponseError, UpstreamError
from app.core.http_client import UpstreamClient
from app.core.logging import get_logger
from app.schemas.rooms import DeviceSnapshot, RoomDevice
from app.services.mappers import MAPPING_ERRORS, map_device_status, map_device_summary
from app.services.outcomes import Failure, FailureKind, ProviderOutcome, failure_from_error

logger = get_logger(__name__).bind(provider="smartthings")

PROVIDER_NAME = "smartthings"


class SmartThingsService:
    """Cloud device registry adapter (SmartThings REST API)"""

    def __init__(self, settings: Settings, session: aiohttp.ClientSession):
        self.settings = settings
        self.batch_size = settings.STATUS_CONCURRENCY
        self._client = UpstreamClient(
            session,
            settings.SMARTTHINGS_API_URL,
            settings.SMARTTHINGS_TOKEN,
            timeout_seconds=settings.UPSTREAM_TIMEOUT_SECONDS,
        )

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    @property
    def is_configured(self) -> bool:
        return self.settings.smartthings_configured

    def _missing_credential(self) -> ProviderOutcome:
        return ProviderOutcome.unconfigured(
            "SMARTTHINGS_TOKEN missing in .env",
            provider=PROVIDER_NAME,
            kind=FailureKind.MISSING_CREDENTIAL,
        )

    async def _list_devices(self) -> List[Dict[str, Any]]:
        data = await self._client.get_json("/v1/devices")
        if not isinstance(data, dict):
            raise MalformedResponseError("Device list is not a JSON object")
        items = data.get("items")
        if not isinstance(items, list):
            return []
        return [d for d in items if isinstance(d, dict) and d.get("deviceId")]

    async def _fetch_device(self, device: Dict[str, Any], now: datetime) -> ProviderOutcome:
        """Fetch one device's status; never raises"""
        device_id = device["deviceId"]
        try:
            status = await self._client.get_json(f"/v1/devices/{quote(str(device_id), safe='')}/status")
            if not isinstance(status, dict):
                raise MalformedResponseError("Device status is not a JSON object")
            return ProviderOutcome.success(
                map_device_status(device, status, self.settings, now), provider=PROVIDER_NAME
            )
        except UpstreamError as e:
            return ProviderOutcome.failed(
                failure_from_error(e, f"status fetch failed for {device_id}"), provider=PROVIDER_NAME
            )
        except MAPPING_ERRORS as e:
            return ProviderOutcome.failed(
                failure_from_error(MalformedResponseError(str(e)), f"status mapping failed for {device_id}"),
                provider=PROVIDER_NAME,
            )
        except Exception as e:
            logger.error("Unexpected status error", device_id=device_id, error=repr(e))
            return ProviderOutcome.failed(
                Failure(FailureKind.UPSTREAM_UNAVAILABLE, f"status fetch failed for {device_id}: {e!r}"),
                provider=PROVIDER_NAME,
            )

    async def fetch_statuses(self, devices: List[Dict[str, Any]]) -> List[RoomDevice]:
        """Fetch per-device status in fixed-size batches.

        At most ``batch_size`` requests are in flight at once. Devices whose
        status fetch fails are dropped from the result.
        """
        now = datetime.now(timezone.utc)
        results: List[RoomDevice] = []
        for start in range(0, len(devices), self.batch_size):
            chunk = devices[start:start + self.batch_size]
            outcomes = await asyncio.gather(*(self._fetch_device(d, now) for d in chunk))
            for device, outcome in zip(chunk, outcomes):
                if outcome.ok:
                    results.append(outcome.data)
                else:
                    logger.warning(
                        "Dropping device without status",
                        device_id=device["deviceId"],
                        reason=outcome.failure.message,
                    )
        return results

    async def fetch_device_list(self) -> ProviderOutcome:
        """List all devices and merge their status into RoomDevice records"""
        if not self.is_configured:
            return self._missing_credential()

        try:
            devices = await self._list_devices()
        except UpstreamError as e:
            logger.error("Device list fetch failed", error=e)
            return ProviderOutcome.failed(
                failure_from_error(e, "devices fetch failed"), provider=PROVIDER_NAME
            )

        rooms = await self.fetch_statuses(devices)
        logger.info("Registry devices mapped", listed=len(devices), mapped=len(rooms))
        return ProviderOutcome.success(rooms, provider=PROVIDER_NAME)

    async def fetch_snapshot(self) -> ProviderOutcome:
        """List devices without status, for diagnostics only"""
        if not self.is_configured:
            return self._missing_credential()

        try:
            devices = await self._list_devices()
        except UpstreamError as e:
            logger.error("Device list fetch failed", error=e)
            return ProviderOutcome.failed(
                failure_from_error(e, "devices fetch failed"), provider=PROVIDER_NAME
            )

        snapshot: List[DeviceSnapshot] = [map_device_summary(d, self.settings) for d in devices]
        return ProviderOutcome.success(snapshot, provider=PROVIDER_NAME)
