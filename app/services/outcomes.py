"""Typed results returned by provider adapters and the room service.

Adapters never raise past their boundary; every call resolves to a
``ProviderOutcome`` that is either a success carrying data, an
"unconfigured" marker, or a failure carrying a ``Failure``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from app.core.errors import (
    MalformedResponseError,
    UpstreamError,
    UpstreamStatusError,
)


class FailureKind(str, Enum):
    UNCONFIGURED = "Unconfigured"
    MISSING_CREDENTIAL = "MissingCredential"
    UPSTREAM_UNAVAILABLE = "UpstreamUnavailable"
    UPSTREAM_ERROR = "UpstreamError"
    MALFORMED_RESPONSE = "MalformedResponse"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    upstream_status: Optional[int] = None
    upstream_body: Optional[str] = None

    @property
    def http_status(self) -> int:
        """Status code the boundary layer answers with"""
        if self.kind == FailureKind.UPSTREAM_ERROR and self.upstream_status:
            return self.upstream_status
        if self.kind in (FailureKind.UPSTREAM_UNAVAILABLE, FailureKind.MALFORMED_RESPONSE):
            return 502
        return 500

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.upstream_body is not None:
            payload["detail"] = self.upstream_body
        return payload


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    UNCONFIGURED = "unconfigured"
    FAILED = "failed"


@dataclass(frozen=True)
class ProviderOutcome:
    status: OutcomeStatus
    data: Any = None
    failure: Optional[Failure] = None
    provider: str = ""

    @classmethod
    def success(cls, data: Any, provider: str = "") -> "ProviderOutcome":
        return cls(OutcomeStatus.SUCCESS, data=data, provider=provider)

    @classmethod
    def unconfigured(cls, message: str, provider: str = "",
                     kind: FailureKind = FailureKind.UNCONFIGURED) -> "ProviderOutcome":
        return cls(OutcomeStatus.UNCONFIGURED, failure=Failure(kind, message), provider=provider)

    @classmethod
    def failed(cls, failure: Failure, provider: str = "") -> "ProviderOutcome":
        return cls(OutcomeStatus.FAILED, failure=failure, provider=provider)

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


def failure_from_error(err: UpstreamError, message: str) -> Failure:
    """Translate an upstream exception into a Failure.

    Status errors keep the upstream status and body for diagnostics; JSON
    decoding problems and transport errors carry no upstream detail.
    """
    if isinstance(err, UpstreamStatusError):
        return Failure(FailureKind.UPSTREAM_ERROR, message,
                       upstream_status=err.status, upstream_body=err.body)
    if isinstance(err, MalformedResponseError):
        return Failure(FailureKind.MALFORMED_RESPONSE, f"{message}: {err}")
    return Failure(FailureKind.UPSTREAM_UNAVAILABLE, f"{message}: {err}")
