from typing import Optional


class UpstreamError(Exception):
    """Base exception for upstream provider calls."""


class UpstreamConnectionError(UpstreamError):
    """Provider could not be reached (network error or timeout)."""


class UpstreamStatusError(UpstreamError):
    """Provider answered with a non-2xx status."""

    def __init__(self, status: int, body: str = "", url: Optional[str] = None):
        super().__init__(f"Upstream request failed ({status})")
        self.status = status
        self.body = body
        self.url = url


class MalformedResponseError(UpstreamError):
    """Provider answered 2xx but the body was not valid JSON."""
