"""
Unit Tests: Event Log

Tests:
- append / categories / console echo
- mirroring of debug entries to the broadcast hub
- clear by category
- formatted rendering in the reference time zone
"""

import logging
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from core.broadcast_hub import BroadcastHub, NotificationKind
from core.event_log import (
    EventLog,
    EventLogEntry,
    LogCategory,
    DEBUG_CATEGORIES,
    ERROR_MARKER
)


# ============================================================================
# APPEND TESTS
# ============================================================================

def test_append_stores_entry_in_order(event_log):
    event_log.chat("first")
    event_log.debug("second")
    event_log.server("third")

    entries = event_log.entries()
    assert [e.text for e in entries] == ["first", "second", "third"]
    assert [e.category for e in entries] == [
        LogCategory.CHAT, LogCategory.DEBUG_LOG, LogCategory.SERVER_LOG
    ]
    assert all(e.timestamp.tzinfo is not None for e in entries)


def test_entries_are_immutable(event_log):
    entry = event_log.debug("frozen")

    with pytest.raises(FrozenInstanceError):
        entry.text = "changed"


def test_append_echoes_to_logging(event_log, caplog):
    with caplog.at_level(logging.INFO, logger="core.event_log"):
        event_log.debug("all good")
        event_log.debug_error("broken")

    levels = {r.getMessage(): r.levelno for r in caplog.records}
    assert levels["[log] all good"] == logging.INFO
    assert levels["[error] broken"] == logging.ERROR


# ============================================================================
# BROADCAST MIRRORING TESTS
# ============================================================================

@pytest.mark.asyncio
async def test_debug_entries_are_broadcast(hub, event_log):
    observer = hub.subscribe()

    event_log.debug("hello")
    event_log.debug_error("boom")

    first = await observer.next_notification()
    second = await observer.next_notification()

    assert first.kind is NotificationKind.LOG
    assert first.payload == "hello"
    assert second.payload == ERROR_MARKER + "boom"


@pytest.mark.asyncio
async def test_chat_and_server_entries_are_not_broadcast(hub, event_log):
    observer = hub.subscribe()

    event_log.chat("chat line")
    event_log.server("server line")
    event_log.server_error("server error")
    event_log.debug("marker")

    notification = await observer.next_notification()
    assert notification.payload == "marker"


def test_event_log_without_hub():
    event_log = EventLog()

    event_log.debug("no observers at all")

    assert len(event_log) == 1


# ============================================================================
# CLEAR TESTS
# ============================================================================

def test_clear_removes_only_given_categories(event_log):
    event_log.chat("chat")
    event_log.debug("debug")
    event_log.debug_error("error")
    event_log.server("server")

    removed = event_log.clear(DEBUG_CATEGORIES)

    assert removed == 2
    assert [e.category for e in event_log.entries()] == [
        LogCategory.CHAT, LogCategory.SERVER_LOG
    ]


def test_clear_empty_journal(event_log):
    assert event_log.clear({LogCategory.CHAT}) == 0


# ============================================================================
# FORMATTING TESTS
# ============================================================================

def test_entry_format_uses_reference_zone():
    entry = EventLogEntry(
        category=LogCategory.CHAT,
        text="hi",
        timestamp=datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
    )

    assert entry.format(ZoneInfo("Asia/Shanghai")) == "2024-01-01 08:00:00 [chat] hi"


def test_render_formatted_filters_category(event_log):
    event_log.chat("one")
    event_log.debug("two")
    event_log.chat("three")

    lines = list(event_log.render_formatted(LogCategory.CHAT))

    assert len(lines) == 2
    assert lines[0].endswith("[chat] one")
    assert lines[1].endswith("[chat] three")


def test_render_formatted_is_lazy_and_restartable(event_log):
    view = event_log.render_formatted(LogCategory.DEBUG_LOG)
    assert list(view) == []

    event_log.debug("late entry")

    assert len(list(view)) == 1
    assert list(view) == list(view)


@pytest.mark.parametrize("category,label", [
    (LogCategory.CHAT, "chat"),
    (LogCategory.DEBUG_LOG, "log"),
    (LogCategory.DEBUG_ERROR, "error"),
    (LogCategory.SERVER_LOG, "server"),
    (LogCategory.SERVER_ERROR, "server-error"),
])
def test_category_labels(category, label):
    event_log = EventLog(hub=BroadcastHub(enabled=False))
    event_log.append(category, "text")

    (line,) = list(event_log.render_formatted(category))
    assert f"[{label}] text" in line
