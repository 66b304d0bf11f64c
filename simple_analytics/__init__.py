# Simple Analytics client for tracking pageviews and events

from .tracker import (
    SimpleAnalytics,
    configure_shared_tracker,
    get_shared_tracker,
)
from .slug import path_to_string, convert_to_slug
from .metadata import metadata_to_json_string
from .visits import VisitRecorder
from .models import Event, EventType, build_event
from .transport import Transport
from .storage import (
    KeyValueStore,
    InMemoryStore,
    JsonFileStore,
    VISIT_DATE_KEY,
    OPTED_OUT_KEY,
)
from .user_agent import CachedUserAgent, platform_user_agent
from .config import ConfigManager, SimpleAnalyticsConfig, load_config
from .errors import (
    SimpleAnalyticsError,
    InvalidEndpoint,
    UserAgentResolutionFailed,
    MetadataSerializationFailed,
    TransportError,
    NetworkError,
    MalformedResponse,
    HTTPStatusError,
)
from .logging_config import setup_logging, stop_logging

__version__ = "0.1.0"

__all__ = [
    "SimpleAnalytics",
    "configure_shared_tracker",
    "get_shared_tracker",
    "path_to_string",
    "convert_to_slug",
    "metadata_to_json_string",
    "VisitRecorder",
    "Event",
    "EventType",
    "build_event",
    "Transport",
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "VISIT_DATE_KEY",
    "OPTED_OUT_KEY",
    "CachedUserAgent",
    "platform_user_agent",
    "ConfigManager",
    "SimpleAnalyticsConfig",
    "load_config",
    "SimpleAnalyticsError",
    "InvalidEndpoint",
    "UserAgentResolutionFailed",
    "MetadataSerializationFailed",
    "TransportError",
    "NetworkError",
    "MalformedResponse",
    "HTTPStatusError",
    "setup_logging",
    "stop_logging",
]
