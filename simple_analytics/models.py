"""
Data models for tracked events.

``Event`` mirrors the JSON body accepted by the collection endpoint.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

PAGEVIEW_EVENT_NAME = "pageview"


class EventType(str, Enum):
    """Kinds of records the endpoint accepts."""

    PAGEVIEW = "pageview"
    EVENT = "event"


class Event(BaseModel):
    """A single pageview or event as sent over the wire."""
    type: EventType = Field(description="Record kind")
    hostname: str = Field(description="Site or app hostname registered with the service")
    event: str = Field(description="Event name, 'pageview' for pageviews")
    ua: Optional[str] = Field(default=None, description="User-agent string")
    path: Optional[str] = Field(default=None, description="Slug path, always starting with '/'")
    language: Optional[str] = Field(default=None, description="Locale identifier such as 'en_US'")
    timezone: Optional[str] = Field(default=None, description="IANA timezone such as 'Europe/Amsterdam'")
    viewport_width: Optional[int] = Field(default=None, description="Not collected by this client")
    viewport_height: Optional[int] = Field(default=None, description="Not collected by this client")
    screen_width: Optional[int] = Field(default=None, description="Not collected by this client")
    screen_height: Optional[int] = Field(default=None, description="Not collected by this client")
    unique: Optional[bool] = Field(default=None, description="First visit of the local day")
    metadata: Optional[str] = Field(default=None, description="Metadata as JSON text, sent as a string")

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JSON body, leaving out absent fields."""
        return self.model_dump(mode="json", exclude_none=True)


def build_event(
    kind: EventType,
    hostname: str,
    name: Optional[str],
    path: Optional[str],
    user_agent: Optional[str],
    language: Optional[str],
    timezone: Optional[str],
    unique: Optional[bool],
    metadata: Optional[str],
) -> Event:
    """Assemble an Event; pageviews always use the 'pageview' event name."""
    if kind is EventType.PAGEVIEW or name is None:
        name = PAGEVIEW_EVENT_NAME
    return Event(
        type=kind,
        hostname=hostname,
        event=name,
        ua=user_agent,
        path=path,
        language=language,
        timezone=timezone,
        unique=unique,
        metadata=metadata,
    )
