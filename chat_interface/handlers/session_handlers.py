"""
Session Handlers - login lifecycle of the bot account

Events:
- scan: a QR challenge was issued
- login / logout: the account session changed
- error: the session client reported a recoverable error
"""

import logging
from typing import Callable

from core.broadcast_hub import BroadcastHub, Notification, NotificationKind
from core.event_log import EventLog, DEBUG_CATEGORIES
from core.service_protocols import ScanEvent, LoginEvent, LogoutEvent, ErrorEvent, ScanStatus

from ..config import LOG_SCAN, LOG_LOGIN, LOG_LOGOUT, LOG_ERROR
from ..states import SessionState
from ..utilities import render_qr_svg, render_qr_terminal

logger = logging.getLogger(__name__)


class SessionHandlers:
    """Handlers for the account session lifecycle"""

    @staticmethod
    async def on_scan(
        event: ScanEvent,
        state: SessionState,
        event_log: EventLog,
        hub: BroadcastHub,
        console_enabled: bool,
        echo: Callable[[str], None] = print
    ):
        """Publish a fresh QR challenge; other scan statuses are only traced"""
        if event.status is not ScanStatus.WAITING:
            logger.debug(f"Scan status {event.status.value}, nothing to do")
            return

        event_log.debug(LOG_SCAN.format(code=event.code))

        svg = render_qr_svg(event.code)
        state.qr_issued(svg)
        hub.broadcast(Notification(NotificationKind.QRCODE, svg))

        if console_enabled:
            echo(render_qr_terminal(event.code))

    @staticmethod
    async def on_login(
        event: LoginEvent,
        state: SessionState,
        event_log: EventLog,
        hub: BroadcastHub
    ):
        name = event.identity.name
        state.logged_in(name)
        event_log.debug(LOG_LOGIN.format(name=name))
        hub.broadcast(Notification(NotificationKind.LOGIN, name))

    @staticmethod
    async def on_logout(
        event: LogoutEvent,
        state: SessionState,
        event_log: EventLog,
        hub: BroadcastHub
    ):
        """
        Forget the identity and the debug journal of the finished session,
        including the logout trace itself.

        Chat and server entries survive a logout.
        """
        name = event.identity.name
        state.logged_out()

        # The trace still reaches logging and observers before the journal is dropped
        event_log.debug(LOG_LOGOUT.format(name=name))
        hub.broadcast(Notification(NotificationKind.LOGOUT, name))

        removed = event_log.clear(DEBUG_CATEGORIES)
        logger.debug(f"Cleared {removed} debug entries on logout")

    @staticmethod
    async def on_error(event: ErrorEvent, event_log: EventLog):
        event_log.debug_error(LOG_ERROR.format(error=str(event.error)))
