from datetime import datetime, timezone
from typing import Any, Dict
from urllib.parse import quote

import aiohttp

from app.core.config import Settings
from app.core.errors import MalformedResponseError, UpstreamError
from app.core.http_client import UpstreamClient
from app.core.logging import get_logger
from app.services.mappers import MAPPING_ERRORS, map_entity_state
from app.services.outcomes import ProviderOutcome, failure_from_error

logger = get_logger(__name__).bind(provider="hub")

PROVIDER_NAME = "hub"


class HubService:
    """Local home-automation hub adapter.

    Represents exactly one pre-identified AC/thermostat entity. Each call
    makes a single read of ``/api/states/{entity_id}``; there are no retries.
    """

    def __init__(self, settings: Settings, session: aiohttp.ClientSession):
        self.settings = settings
        self.entity_id = settings.HA_ENTITY_ID
        self._client = UpstreamClient(
            session,
            settings.HA_BASE_URL,
            settings.HA_TOKEN,
            timeout_seconds=settings.UPSTREAM_TIMEOUT_SECONDS,
        )

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    @property
    def is_configured(self) -> bool:
        return self.settings.hub_configured

    def _state_path(self) -> str:
        return f"/api/states/{quote(self.entity_id, safe='')}"

    async def fetch_raw_state(self) -> Dict[str, Any]:
        """Return the entity's state document as the hub sent it.

        Raises UpstreamError subclasses; callers must check ``is_configured``.
        """
        payload = await self._client.get_json(self._state_path())
        if not isinstance(payload, dict):
            raise MalformedResponseError("Entity state is not a JSON object")
        return payload

    async def fetch_room_state(self) -> ProviderOutcome:
        """Fetch the configured entity and map it to a one-element device list"""
        if not self.is_configured:
            return ProviderOutcome.unconfigured(
                "HA_BASE_URL, HA_TOKEN and HA_ENTITY_ID are required", provider=PROVIDER_NAME
            )

        try:
            payload = await self.fetch_raw_state()
            if not isinstance(payload.get("state"), str):
                raise MalformedResponseError("Entity state has no 'state' string")
            device = map_entity_state(self.entity_id, payload, self.settings, datetime.now(timezone.utc))
        except UpstreamError as e:
            logger.warning("Hub state fetch failed", entity_id=self.entity_id, error=e)
            return ProviderOutcome.failed(
                failure_from_error(e, "hub state fetch failed"), provider=PROVIDER_NAME
            )
        except MAPPING_ERRORS as e:
            logger.warning("Hub state not mappable", entity_id=self.entity_id, error=repr(e))
            return ProviderOutcome.failed(
                failure_from_error(MalformedResponseError(str(e)), "hub state mapping failed"),
                provider=PROVIDER_NAME,
            )

        logger.debug("Hub state mapped", entity_id=self.entity_id, mode=device.mode)
        return ProviderOutcome.success([device], provider=PROVIDER_NAME)
