"""
transport.py - delivery of events to the collection endpoint

Each call is a single POST attempt; nothing is retried or queued.
"""

import asyncio
import json
import logging
from typing import Optional

import requests

from .config import DEFAULT_ENDPOINT
from .errors import HTTPStatusError, InvalidEndpoint, MalformedResponse, NetworkError
from .models import Event

_LOG = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def validate_endpoint(endpoint: str) -> str:
    """Return *endpoint* if it is an absolute http(s) URL, else raise InvalidEndpoint."""
    try:
        parsed = requests.compat.urlparse(endpoint)
    except (TypeError, ValueError) as e:
        raise InvalidEndpoint(str(endpoint)) from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidEndpoint(endpoint)
    return endpoint


class Transport:
    """Posts events as JSON using a requests session."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = validate_endpoint(endpoint)
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, body: bytes) -> requests.Response:
        return self.session.post(
            self.endpoint, data=body, headers=JSON_HEADERS, timeout=self.timeout
        )

    async def send(self, event: Event) -> None:
        """
        POST *event* and check the response status.

        The blocking request runs in a worker thread so the event loop is
        never held up by network I/O.

        Raises:
            NetworkError: the request failed before a response arrived
            MalformedResponse: the response has no usable status code
            HTTPStatusError: the status is outside 200-299
        """
        body = json.dumps(event.to_payload(), ensure_ascii=False).encode("utf-8")
        try:
            response = await asyncio.to_thread(self._post, body)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to reach {self.endpoint}: {e}") from e

        status = getattr(response, "status_code", None)
        if not isinstance(status, int) or isinstance(status, bool) or not 100 <= status <= 599:
            raise MalformedResponse(f"Response from {self.endpoint} has no valid HTTP status")
        if not 200 <= status <= 299:
            raise HTTPStatusError(status, getattr(response, "reason", None))

        _LOG.debug("Sent %s '%s' (HTTP %d)", event.type.value, event.event, status)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
