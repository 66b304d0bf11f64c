"""
User-agent resolution.

Resolvers are coroutines returning a user-agent string. ``CachedUserAgent``
wraps one so it is resolved at most once per successful lookup.
"""

import logging
import platform
from typing import Awaitable, Callable, Optional

from requests.utils import default_user_agent

from .errors import UserAgentResolutionFailed

logger = logging.getLogger(__name__)

UserAgentResolver = Callable[[], Awaitable[str]]


async def platform_user_agent() -> str:
    """Build a user-agent from the HTTP client's default and the host platform."""
    system = platform.system() or "Unknown"
    release = platform.release()
    machine = platform.machine()
    details = "; ".join(part for part in (f"{system} {release}".strip(), machine) if part)
    return f"{default_user_agent()} ({details}) Python/{platform.python_version()}"


class CachedUserAgent:
    """Caches the first successfully resolved user-agent for the process lifetime."""

    def __init__(self, resolver: UserAgentResolver = platform_user_agent):
        self._resolver = resolver
        self.value: Optional[str] = None

    async def resolve(self) -> str:
        """
        Return the cached user-agent, resolving it on first use.

        Concurrent first calls may each run the resolver; whichever finishes
        last wins the cache.

        Raises:
            UserAgentResolutionFailed: when the resolver raises or returns a non-string
        """
        if self.value is not None:
            return self.value
        try:
            result = await self._resolver()
        except Exception as e:
            raise UserAgentResolutionFailed(f"User-agent lookup failed: {e}") from e
        if not isinstance(result, str):
            raise UserAgentResolutionFailed(
                f"User-agent lookup returned {type(result).__name__}, expected str"
            )
        self.value = result
        logger.debug(f"Resolved user-agent: {result}")
        return result
