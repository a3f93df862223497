"""
Core Package - Configuration, logging and the shared event journal
"""

from .config import get_config, Config
from .exceptions import GreeterBotException, ConfigurationError, SessionClientError
from .event_log import EventLog, EventLogEntry, LogCategory
from .broadcast_hub import BroadcastHub, Notification, NotificationKind, Observer

__all__ = [
    "get_config",
    "Config",
    "GreeterBotException",
    "ConfigurationError",
    "SessionClientError",
    "EventLog",
    "EventLogEntry",
    "LogCategory",
    "BroadcastHub",
    "Notification",
    "NotificationKind",
    "Observer",
]
