from typing import Awaitable, Callable, List, Tuple

from app.core.logging import get_logger
from app.services.hub_service import HubService
from app.services.outcomes import (
    Failure,
    FailureKind,
    OutcomeStatus,
    ProviderOutcome,
)
from app.services.smartthings_service import SmartThingsService

logger = get_logger(__name__)

ProviderAttempt = Tuple[str, Callable[[], Awaitable[ProviderOutcome]]]


class RoomService:
    """Aggregates room devices from the first usable provider.

    Providers are attempted once each, in priority order: the local hub, then
    the cloud registry. The first success wins. An unconfigured or failed
    provider moves on to the next one; when none is left, the last outcome
    becomes the terminal failure.
    """

    def __init__(self, hub: HubService, smartthings: SmartThingsService):
        self.hub = hub
        self.smartthings = smartthings

    def attempts(self) -> List[ProviderAttempt]:
        return [
            (self.hub.name, self.hub.fetch_room_state),
            (self.smartthings.name, self.smartthings.fetch_device_list),
        ]

    async def _attempt(self, name: str, fetch: Callable[[], Awaitable[ProviderOutcome]]) -> ProviderOutcome:
        try:
            return await fetch()
        except Exception as e:
            logger.error("Provider raised unexpectedly", provider=name, error=repr(e))
            return ProviderOutcome.failed(
                Failure(FailureKind.UPSTREAM_UNAVAILABLE, f"{name} provider error: {e}"),
                provider=name,
            )

    async def get_rooms(self) -> ProviderOutcome:
        """Resolve to a successful device list or a terminal failure; never raises"""
        last = None
        for name, fetch in self.attempts():
            outcome = await self._attempt(name, fetch)
            if outcome.ok:
                logger.info("Rooms served", provider=name, devices=len(outcome.data))
                return outcome

            if outcome.status == OutcomeStatus.UNCONFIGURED:
                logger.debug("Provider not configured, skipping", provider=name)
            else:
                logger.warning(
                    "Provider failed, falling back",
                    provider=name,
                    kind=outcome.failure.kind.value,
                    reason=outcome.failure.message,
                )
            last = outcome

        if last is None or last.status == OutcomeStatus.UNCONFIGURED:
            message = last.failure.message if last is not None else "no providers registered"
            return ProviderOutcome.failed(
                Failure(FailureKind.UNCONFIGURED, message),
                provider=last.provider if last is not None else "",
            )
        return last


def get_room_service(hub: HubService, smartthings: SmartThingsService) -> RoomService:
    return RoomService(hub, smartthings)
