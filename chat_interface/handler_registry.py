"""
Handler Registry - explicit dispatch table for session events

Responsibilities:
- binding handlers to their dependencies (functools.partial)
- one entry per EventType
- wrapping every entry with the error boundary middleware
"""

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional

from core.broadcast_hub import BroadcastHub
from core.config import BotConfig
from core.event_log import EventLog
from core.service_protocols import EventType, SessionClient, SessionEvent

from .handlers import SessionHandlers, MessageHandlers, FriendshipHandlers
from .middleware import ErrorBoundaryMiddleware
from .states import SessionState

logger = logging.getLogger(__name__)

EventHandler = Callable[[SessionEvent], Awaitable[Any]]


class HandlerRegistry:
    """
    Registry of all session event handlers

    Dependencies are injected once at registration time.
    """

    def __init__(
        self,
        client: SessionClient,
        state: SessionState,
        event_log: EventLog,
        hub: BroadcastHub,
        bot_config: BotConfig,
        console_enabled: bool,
        echo: Callable[[str], None] = print,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        """
        Args:
            client: Session client used for room lookups
            state: Shared session state
            event_log: Shared event journal
            hub: Broadcast hub for observer notifications
            bot_config: Bot name, target group and action delay
            console_enabled: Print QR challenges to the terminal
            echo: Terminal writer
            sleep: Delay function for the friendship sequence
        """
        self.client = client
        self.state = state
        self.event_log = event_log
        self.hub = hub
        self.bot_config = bot_config
        self.console_enabled = console_enabled
        self.echo = echo
        self.sleep = sleep

        self._handlers: Dict[EventType, EventHandler] = {}
        self.error_boundary: Optional[ErrorBoundaryMiddleware] = None

    @property
    def handlers(self) -> Dict[EventType, EventHandler]:
        return dict(self._handlers)

    def register_all(self) -> "HandlerRegistry":
        """Build the dispatch table"""
        logger.info("🔧 Registering session handlers...")

        on_error = partial(SessionHandlers.on_error, event_log=self.event_log)
        self.error_boundary = ErrorBoundaryMiddleware(on_error)

        self._register(EventType.SCAN, partial(
            SessionHandlers.on_scan,
            state=self.state,
            event_log=self.event_log,
            hub=self.hub,
            console_enabled=self.console_enabled,
            echo=self.echo
        ))
        self._register(EventType.LOGIN, partial(
            SessionHandlers.on_login,
            state=self.state,
            event_log=self.event_log,
            hub=self.hub
        ))
        self._register(EventType.LOGOUT, partial(
            SessionHandlers.on_logout,
            state=self.state,
            event_log=self.event_log,
            hub=self.hub
        ))
        self._register(EventType.ERROR, on_error)
        self._register(EventType.MESSAGE, partial(
            MessageHandlers.on_message,
            client=self.client,
            event_log=self.event_log,
            target_group_name=self.bot_config.target_group_name
        ))

        friendship_kwargs = {}
        if self.sleep is not None:
            friendship_kwargs["sleep"] = self.sleep
        self._register(EventType.FRIENDSHIP, partial(
            FriendshipHandlers.on_friendship,
            event_log=self.event_log,
            who_am_i=self.bot_config.who_am_i,
            target_group_name=self.bot_config.target_group_name,
            action_delay=self.bot_config.action_delay,
            **friendship_kwargs
        ))

        logger.info(f"✅ {len(self._handlers)} session handlers registered")
        return self

    def _register(self, event_type: EventType, handler: EventHandler):
        self._handlers[event_type] = handler

    async def dispatch(self, event: SessionEvent) -> Any:
        """Run the handler registered for ``event`` inside the error boundary"""
        if self.error_boundary is None:
            self.register_all()

        handler = self._handlers.get(event.type)
        if handler is None:
            logger.warning(f"No handler registered for {event.type}")
            return None

        return await self.error_boundary(handler, event)
