"""
Daily unique-visit detection.

The first event tracked on a device-local calendar day carries
``unique=True``; every later event that day carries ``False``. The instant of
the last unique visit is persisted so the rule holds across restarts.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from .storage import VISIT_DATE_KEY, KeyValueStore

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    """Current instant as an aware datetime in the device's timezone."""
    return datetime.now().astimezone()


def _parse_instant(value) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        logger.warning(f"Ignoring unreadable stored visit date: {value!r}")
        return None


class VisitRecorder:
    """Tracks the last unique visit instant for one storage scope."""

    def __init__(
        self,
        store: KeyValueStore,
        scope: Optional[str] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        """
        Args:
            store: Persistence for the last visit instant
            scope: Shared scope name, or None for the process-default scope
            clock: Returns the current aware local datetime
        """
        self.store = store
        self.scope = scope
        self._clock = clock
        self.visit_date: Optional[datetime] = _parse_instant(store.get(VISIT_DATE_KEY, scope))

    def _is_today(self, instant: datetime, now: datetime) -> bool:
        # Naive values are taken as device-local time
        return instant.astimezone(now.tzinfo).date() == now.date()

    def is_unique(self) -> bool:
        """
        Return True if this is the first visit of the current local day.

        A True result records the current instant, both in memory and in
        the store, so later calls on the same day return False.
        """
        now = self._clock()
        if self.visit_date is not None and self._is_today(self.visit_date, now):
            return False

        self.visit_date = now
        self.store.set(VISIT_DATE_KEY, self.scope, now.isoformat())
        logger.debug(f"Recorded unique visit at {now.isoformat()}")
        return True
