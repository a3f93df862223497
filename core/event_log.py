"""
Event Log - append-only journal of bot activity

Every entry belongs to one category:
- chat: inbound message traces
- debug-log / debug-error: session lifecycle and actions (mirrored to observers)
- server-log / server-error: operator endpoint activity

Entries are written to the ``logging`` module as they are appended and can
be dumped later in a human readable form by the console ``logs`` command.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Iterable, Iterator, List, Optional
from zoneinfo import ZoneInfo

from .broadcast_hub import BroadcastHub, Notification, NotificationKind

logger = logging.getLogger(__name__)

ERROR_MARKER = "[ERROR] "
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogCategory(str, Enum):
    CHAT = "chat"
    DEBUG_LOG = "debug-log"
    DEBUG_ERROR = "debug-error"
    SERVER_LOG = "server-log"
    SERVER_ERROR = "server-error"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_error(self) -> bool:
        return self in (LogCategory.DEBUG_ERROR, LogCategory.SERVER_ERROR)


_LABELS = {
    LogCategory.CHAT: "chat",
    LogCategory.DEBUG_LOG: "log",
    LogCategory.DEBUG_ERROR: "error",
    LogCategory.SERVER_LOG: "server",
    LogCategory.SERVER_ERROR: "server-error",
}

DEBUG_CATEGORIES = frozenset({LogCategory.DEBUG_LOG, LogCategory.DEBUG_ERROR})


@dataclass(frozen=True)
class EventLogEntry:
    category: LogCategory
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def format(self, tz: tzinfo) -> str:
        stamp = self.timestamp.astimezone(tz).strftime(TIMESTAMP_FORMAT)
        return f"{stamp} [{self.category.label}] {self.text}"


class FormattedLog:
    """Lazy, restartable view over one category of the journal"""

    def __init__(self, event_log: "EventLog", category: LogCategory):
        self._event_log = event_log
        self._category = category

    def __iter__(self) -> Iterator[str]:
        tz = self._event_log.timezone
        for entry in self._event_log.entries(self._category):
            yield entry.format(tz)


class EventLog:
    """
    In-memory journal shared by the session policy and the operator surfaces.

    Access is confined to the event loop thread, so no locking is done.
    """

    def __init__(
        self,
        hub: Optional[BroadcastHub] = None,
        tz: Optional[tzinfo] = None
    ):
        self.hub = hub
        self.timezone = tz or ZoneInfo("Asia/Shanghai")
        self._entries: List[EventLogEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, category: LogCategory, text: str) -> EventLogEntry:
        """Record an entry, echo it to the console and mirror debug entries to observers"""
        entry = EventLogEntry(category=category, text=text)
        self._entries.append(entry)

        if category.is_error:
            logger.error(f"[{category.label}] {text}")
        else:
            logger.info(f"[{category.label}] {text}")

        if self.hub is not None and category in DEBUG_CATEGORIES:
            payload = ERROR_MARKER + text if category is LogCategory.DEBUG_ERROR else text
            self.hub.broadcast(Notification(NotificationKind.LOG, payload))

        return entry

    # Shorthands used throughout the handlers
    def chat(self, text: str) -> EventLogEntry:
        return self.append(LogCategory.CHAT, text)

    def debug(self, text: str) -> EventLogEntry:
        return self.append(LogCategory.DEBUG_LOG, text)

    def debug_error(self, text: str) -> EventLogEntry:
        return self.append(LogCategory.DEBUG_ERROR, text)

    def server(self, text: str) -> EventLogEntry:
        return self.append(LogCategory.SERVER_LOG, text)

    def server_error(self, text: str) -> EventLogEntry:
        return self.append(LogCategory.SERVER_ERROR, text)

    def clear(self, categories: Iterable[LogCategory]) -> int:
        """Remove every entry in the given categories; returns the number removed"""
        targets = frozenset(categories)
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.category not in targets]
        return before - len(self._entries)

    def entries(self, category: Optional[LogCategory] = None) -> List[EventLogEntry]:
        """Snapshot of the journal, optionally filtered by category"""
        if category is None:
            return list(self._entries)
        return [e for e in self._entries if e.category is category]

    def render_formatted(self, category: LogCategory) -> FormattedLog:
        return FormattedLog(self, category)
