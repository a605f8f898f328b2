import asyncio
import json
import logging
from typing import Any, Optional

import aiohttp

from app.core.errors import (
    MalformedResponseError,
    UpstreamConnectionError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Bearer-authenticated JSON reader for one upstream base URL"""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        token: str,
        timeout_seconds: Optional[float] = None,
    ):
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds) if timeout_seconds else None

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def get_text(self, path: str) -> str:
        """GET a path and return the body text of a 2xx response.

        Raises UpstreamConnectionError on network failure or timeout,
        MalformedResponseError when the body is not valid text, and
        UpstreamStatusError (with the upstream body) on any non-2xx status.
        """
        url = self.url_for(path)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }
        kwargs = {"timeout": self._timeout} if self._timeout is not None else {}

        try:
            async with self._session.get(url, headers=headers, **kwargs) as resp:
                text = await resp.text()
                status = resp.status
        except UnicodeDecodeError as err:
            raise MalformedResponseError(f"Undecodable body from {url}") from err
        except asyncio.TimeoutError as err:
            raise UpstreamConnectionError(f"Timed out calling {url}") from err
        except aiohttp.ClientError as err:
            raise UpstreamConnectionError(f"Connection error calling {url}: {err}") from err

        if not 200 <= status < 300:
            logger.debug(f"Upstream {url} answered {status}")
            raise UpstreamStatusError(status, text, url)

        return text

    async def get_json(self, path: str) -> Any:
        """GET a path and decode the JSON body"""
        text = await self.get_text(path)
        try:
            return json.loads(text)
        except ValueError as err:
            raise MalformedResponseError(f"Invalid JSON from {self.url_for(path)}") from err
