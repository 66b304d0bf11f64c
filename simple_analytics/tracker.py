"""
Simple Analytics tracker

Main entry point for sending pageviews and events. The hostname must match
the website domain registered with Simple Analytics, without ``https://``:

    analytics = SimpleAnalytics("mobileapp.yourdomain.com")
    analytics.track(path=["list", "detailview"])
    analytics.track(event="signup", metadata={"plan": "premium"})
"""

import asyncio
import logging
import threading
from typing import Any, Mapping, Optional, Sequence, Set

from .config import SimpleAnalyticsConfig, load_config
from .environment import current_language, current_timezone
from .metadata import metadata_to_json_string
from .models import EventType, build_event
from .slug import path_to_string
from .storage import OPTED_OUT_KEY, JsonFileStore, KeyValueStore
from .transport import Transport
from .user_agent import CachedUserAgent, UserAgentResolver, platform_user_agent
from .visits import VisitRecorder, local_now

logger = logging.getLogger(__name__)


class SimpleAnalytics:
    """Tracks pageviews and events for a single hostname."""

    def __init__(
        self,
        hostname: str,
        shared_scope: Optional[str] = None,
        *,
        store: Optional[KeyValueStore] = None,
        transport: Optional[Transport] = None,
        user_agent_resolver: UserAgentResolver = platform_user_agent,
        clock=local_now,
        language: Optional[str] = None,
        timezone: Optional[str] = None,
        config: Optional[SimpleAnalyticsConfig] = None,
    ):
        """Create a tracker.

        Args:
            hostname: The hostname as registered in Simple Analytics
            shared_scope: Storage scope shared with cooperating processes
                (e.g. an app and its extension) so unique visitors are only
                counted once across them
            store: Settings and visit-state storage; defaults to JSON files
                in the configured storage directory
            transport: Event delivery; defaults to the configured endpoint
            user_agent_resolver: Coroutine function returning the user-agent
            clock: Returns the current aware local datetime
            language: Locale identifier, detected when omitted
            timezone: IANA timezone, detected when omitted
            config: Client configuration, loaded from file/env when omitted
        """
        if store is None or transport is None:
            config = config or load_config()
        self.hostname = hostname
        self.shared_scope = shared_scope
        self.store = store if store is not None else JsonFileStore(config.storage_dir)
        self.transport = transport if transport is not None else Transport(config.endpoint, config.timeout)
        self.language = language or current_language()
        self.timezone = timezone or current_timezone()
        self.visits = VisitRecorder(self.store, shared_scope, clock=clock)
        self._user_agent = CachedUserAgent(user_agent_resolver)
        self._pending: Set[asyncio.Task] = set()
        self._threads: Set[threading.Thread] = set()

    @property
    def is_opted_out(self) -> bool:
        """When True all tracking is skipped. Persisted in the default scope."""
        return bool(self.store.get(OPTED_OUT_KEY))

    @is_opted_out.setter
    def is_opted_out(self, value: bool) -> None:
        self.store.set(OPTED_OUT_KEY, None, bool(value))

    def track(
        self,
        event: Optional[str] = None,
        path: Sequence[str] = (),
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Track a pageview or event without waiting for the result.

        Runs as a task on the current event loop, or on a background thread
        when called outside one. Failures are logged, never raised.

        Args:
            event: Event name; None tracks a pageview
            path: Path segments, e.g. ``["list", "detailview", "edit"]``
            metadata: Optional mapping, e.g. ``{"plan": "premium"}``
        """
        coro = self._track_and_log(event, list(path), metadata)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._run_in_thread(coro)
            return
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _run_in_thread(self, coro) -> None:
        def runner():
            try:
                asyncio.run(coro)
            finally:
                self._threads.discard(threading.current_thread())

        thread = threading.Thread(target=runner, name="simple-analytics-track", daemon=True)
        self._threads.add(thread)
        thread.start()

    async def _track_and_log(self, event, path, metadata) -> None:
        try:
            await self.track_raw(event=event, path=path, metadata=metadata)
        except Exception as e:
            kind = "event" if event is not None else "pageview"
            logger.warning(f"SimpleAnalytics: Error tracking {kind}: {e}")

    async def track_raw(
        self,
        event: Optional[str] = None,
        path: Sequence[str] = (),
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Track a pageview or event and raise on failure.

        Raises:
            UserAgentResolutionFailed: the user-agent could not be resolved
            TransportError: the event could not be delivered
        """
        if event is not None:
            await self.track_event(event, path, metadata)
        else:
            await self.track_pageview(path, metadata)

    async def track_pageview(
        self, path: Sequence[str] = (), metadata: Optional[Mapping[str, Any]] = None
    ) -> None:
        """Track a pageview, raising on failure."""
        await self._send(EventType.PAGEVIEW, None, path, metadata)

    async def track_event(
        self,
        event: str,
        path: Sequence[str] = (),
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Track a named event, raising on failure."""
        await self._send(EventType.EVENT, event, path, metadata)

    async def _send(self, kind: EventType, name, path, metadata) -> None:
        if self.is_opted_out:
            logger.debug("Tracking skipped, user opted out")
            return
        user_agent = await self._user_agent.resolve()
        record = build_event(
            kind=kind,
            hostname=self.hostname,
            name=name,
            path=path_to_string(path),
            user_agent=user_agent,
            language=self.language,
            timezone=self.timezone,
            unique=self.visits.is_unique(),
            metadata=metadata_to_json_string(metadata),
        )
        await self.transport.send(record)

    async def wait_pending(self) -> None:
        """Wait for fire-and-forget tasks started from this event loop."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self, timeout: Optional[float] = None) -> None:
        """Join background tracking threads and close the transport."""
        for thread in list(self._threads):
            thread.join(timeout)
        self.transport.close()


_shared_tracker: Optional[SimpleAnalytics] = None


def configure_shared_tracker(hostname: str, shared_scope: Optional[str] = None, **kwargs) -> SimpleAnalytics:
    """Create the process-wide tracker returned by ``get_shared_tracker``."""
    global _shared_tracker
    _shared_tracker = SimpleAnalytics(hostname, shared_scope, **kwargs)
    return _shared_tracker


def get_shared_tracker() -> SimpleAnalytics:
    """Return the process-wide tracker.

    Raises:
        RuntimeError: if ``configure_shared_tracker`` has not been called
    """
    if _shared_tracker is None:
        raise RuntimeError("Shared tracker not configured; call configure_shared_tracker() first")
    return _shared_tracker
