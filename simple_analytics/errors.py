"""
Error types raised by the tracking pipeline.

Only ``track_raw`` and the lower-level components raise these; the
fire-and-forget ``track`` entry point logs them and carries on.
"""

from typing import Optional


class SimpleAnalyticsError(Exception):
    """Base class for every error raised by this package."""


class InvalidEndpoint(SimpleAnalyticsError):
    """The configured collection endpoint is not a usable http(s) URL."""

    def __init__(self, endpoint: str):
        super().__init__(f"Invalid collection endpoint: {endpoint!r}")
        self.endpoint = endpoint


class UserAgentResolutionFailed(SimpleAnalyticsError):
    """The user-agent lookup failed or returned something other than a string."""


class MetadataSerializationFailed(SimpleAnalyticsError):
    """Metadata could not be encoded as JSON. Never escapes the serializer."""


class TransportError(SimpleAnalyticsError):
    """Delivery of an event to the collection endpoint failed."""

    kind = "transport"


class NetworkError(TransportError):
    """The request never produced a response (DNS, connect, timeout, ...)."""

    kind = "network"


class MalformedResponse(TransportError):
    """A response came back without a valid HTTP status."""

    kind = "malformed_response"


class HTTPStatusError(TransportError):
    """The endpoint answered with a status outside 200-299."""

    kind = "http_status"

    def __init__(self, status_code: int, reason: Optional[str] = None):
        message = f"Collection endpoint returned HTTP {status_code}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
