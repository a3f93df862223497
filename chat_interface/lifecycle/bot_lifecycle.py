"""
Bot Lifecycle Manager - start, run and stop the bot

Responsibilities:
- starting the session client, dispatcher and operator surfaces
- signal handling (SIGINT, SIGTERM) and the console ``exit`` command
- shutdown: stop the client, abandon handler sequences in flight
- shutdown when the session client or its event stream fails

Handler sequences suspended at a delay or an await are not resumed on
shutdown; a half-finished friend request stays half-finished.
"""

import asyncio
import contextlib
import logging
import signal
from typing import Optional

from core.event_log import EventLog
from core.service_protocols import SessionClient

from ..config import LOG_ERROR
from ..dispatcher import SessionDispatcher

logger = logging.getLogger(__name__)


class BotLifecycle:
    """
    Lifecycle of the bot process

    Coordinates startup, the run loop and shutdown of every component.
    """

    def __init__(
        self,
        client: SessionClient,
        dispatcher: SessionDispatcher,
        event_log: EventLog,
        console=None,
        web_server=None
    ):
        """
        Args:
            client: Session client
            dispatcher: Session event dispatcher
            event_log: Shared journal
            console: OperatorConsole or None when the console sink is disabled
            web_server: WebServer or None when HTTP is disabled
        """
        self.client = client
        self.dispatcher = dispatcher
        self.event_log = event_log
        self.console = console
        self.web_server = web_server

        self.client_task: Optional[asyncio.Task] = None
        self._shutdown_event: Optional[asyncio.Event] = None
        self._stopped = False

    @property
    def shutdown_event(self) -> asyncio.Event:
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        return self._shutdown_event

    def request_shutdown(self):
        """Ask the run loop to stop (signal handler / console exit)"""
        if not self.shutdown_event.is_set():
            self.event_log.debug("Shutting down...")
        self.shutdown_event.set()

    def setup_signal_handlers(self):
        """Route SIGINT and SIGTERM to a graceful shutdown"""
        loop = asyncio.get_running_loop()

        def signal_handler(sig):
            logger.info(f"🛑 Received signal {sig.name}, initiating graceful shutdown...")
            self.request_shutdown()

        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, signal_handler, sig)
            except (NotImplementedError, RuntimeError):
                # Not available on this platform / not the main thread
                logger.debug(f"Signal handler for {sig.name} not installed")

        logger.info("📡 Signal handlers configured (SIGINT, SIGTERM)")

    async def _run_client(self):
        try:
            await self.client.start()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.event_log.debug_error(LOG_ERROR.format(error=e))
            logger.error(f"❌ Session client failed to start: {e}", exc_info=True)
            self.request_shutdown()

    def _on_event_stream_failure(self, error: Exception):
        self.event_log.debug_error(LOG_ERROR.format(error=error))
        self.request_shutdown()

    async def start(self):
        """Start every component without blocking"""
        self.dispatcher.start(on_failure=self._on_event_stream_failure)
        self.client_task = asyncio.create_task(self._run_client(), name="session-client")

        if self.web_server is not None:
            self.web_server.start()
        if self.console is not None:
            self.console.start()

        logger.info("🚀 Bot started")

    async def run(self):
        """Start, wait for a shutdown request, stop"""
        self.setup_signal_handlers()
        try:
            await self.start()
            await self.shutdown_event.wait()
        finally:
            await self.stop()

    async def stop(self):
        """Graceful shutdown; safe to call more than once"""
        if self._stopped:
            return
        self._stopped = True
        logger.info("🛑 Stopping bot gracefully...")

        try:
            await self.client.stop()
            logger.info("✅ Session client stopped")
        except Exception as e:
            logger.error(f"❌ Error stopping session client: {e}", exc_info=True)

        if self.client_task and not self.client_task.done():
            self.client_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self.client_task

        await self.dispatcher.stop()

        if self.web_server is not None:
            await self.web_server.stop()
        if self.console is not None:
            await self.console.stop()

        logger.info("🎉 Bot stopped")
