from __future__ import annotations

from typing import Any, List, Optional


class AcquisitionError(RuntimeError):
    """Base error for every failure the acquisition pipeline can surface."""

    kind = "AcquisitionError"


class PermissionDenied(AcquisitionError):
    """Location authorization was denied, restricted or not yet granted."""

    kind = "PermissionDenied"


class LocationUnavailable(AcquisitionError):
    """Location services are disabled or the platform reported a failure."""

    kind = "LocationUnavailable"


class Timeout(AcquisitionError):
    """No location fix arrived within the configured interval."""

    kind = "Timeout"


class PlaceNotFound(AcquisitionError):
    kind = "PlaceNotFound"


class ResolverUnavailable(AcquisitionError):
    kind = "ResolverUnavailable"


class InvalidResponse(AcquisitionError):
    """The provider answered with a non-success status code."""

    kind = "InvalidResponse"

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class DecodingError(AcquisitionError):
    """The body could not be turned into a snapshot.

    ``reason`` is ``"malformed"`` when the body is not JSON at all and
    ``"schema"`` when it is JSON that no longer matches the expected payload.
    """

    kind = "DecodingError"

    def __init__(self, reason: str, message: str, errors: Optional[List[Any]] = None) -> None:
        super().__init__(f"{reason}: {message}")
        self.reason = reason
        self.errors = list(errors or [])


class TransportError(AcquisitionError):
    kind = "TransportError"


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or malformed."""


__all__ = [
    "AcquisitionError",
    "ConfigurationError",
    "DecodingError",
    "InvalidResponse",
    "LocationUnavailable",
    "PermissionDenied",
    "PlaceNotFound",
    "ResolverUnavailable",
    "Timeout",
    "TransportError",
]
