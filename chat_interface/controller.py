"""
Greeter Bot Controller - composition of all components

This controller only wires things together; decisions live in the handlers.

Architecture:
- core: configuration, event log, broadcast hub
- handlers + handler_registry: session policy
- dispatcher: session event loop
- lifecycle: startup / graceful shutdown
- operator_interface: console and HTTP observer endpoint
"""

import logging
from typing import Optional

from core.broadcast_hub import BroadcastHub
from core.config import Config
from core.event_log import EventLog, DEBUG_CATEGORIES
from core.service_protocols import SessionClient
from operator_interface import OperatorConsole, WebServer, create_app

from .dispatcher import SessionDispatcher
from .handler_registry import HandlerRegistry
from .lifecycle import BotLifecycle
from .states import SessionState

logger = logging.getLogger(__name__)


class GreeterController:
    """
    Composition root of the greeter bot

    Owns the process-wide state (session state, journal, observer set) and
    hands it by reference to every component.
    """

    def __init__(self, config: Config, client: SessionClient):
        logger.info("🤖 Initializing Greeter Controller...")
        self.config = config
        self.client = client

        # 1. Shared state
        self.hub = BroadcastHub(enabled=config.broadcasting_enabled)
        self.event_log = EventLog(hub=self.hub, tz=config.log_timezone)
        self.state = SessionState()

        # 2. Session policy
        self.registry = HandlerRegistry(
            client=client,
            state=self.state,
            event_log=self.event_log,
            hub=self.hub,
            bot_config=config.bot,
            console_enabled=config.console.enabled
        ).register_all()
        self.dispatcher = SessionDispatcher(client, self.registry)

        # 3. Operator surfaces
        self.console: Optional[OperatorConsole] = None
        if config.console.enabled:
            self.console = OperatorConsole(
                event_log=self.event_log,
                request_logout=self.request_logout,
                request_exit=self.request_exit
            )

        self.web_server: Optional[WebServer] = None
        if config.http.enabled:
            app = create_app(
                state=self.state,
                event_log=self.event_log,
                hub=self.hub,
                request_logout=self.request_logout,
                title=config.bot.who_am_i
            )
            self.web_server = WebServer(
                app=app,
                hub=self.hub,
                event_log=self.event_log,
                host=config.http.host,
                port=config.http.port
            )

        # 4. Lifecycle
        self.lifecycle = BotLifecycle(
            client=client,
            dispatcher=self.dispatcher,
            event_log=self.event_log,
            console=self.console,
            web_server=self.web_server
        )
        logger.info("🎉 Greeter Controller initialized")

    async def request_logout(self):
        """Operator logout: end the account session and drop the debug journal"""
        await self.client.logout()
        self.event_log.clear(DEBUG_CATEGORIES)

    async def request_exit(self):
        self.lifecycle.request_shutdown()

    async def start(self):
        """Run until a signal or the console ``exit`` command"""
        self._print_startup_banner()
        await self.lifecycle.run()

    async def stop(self):
        await self.lifecycle.stop()

    def _print_startup_banner(self):
        for key, value in self.config.summary().items():
            logger.info(f"  {key}: {value}")
