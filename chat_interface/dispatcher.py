"""
Session Dispatcher - single loop over the session client's event stream

Every event gets its own task so a long handler (the friendship sequence
sleeps twice) never holds up the next message. Handlers interleave only at
their await points.
"""

import asyncio
import logging
from typing import Callable, Optional, Set

from core.service_protocols import SessionClient

from .handler_registry import HandlerRegistry

logger = logging.getLogger(__name__)


class SessionDispatcher:
    """Feeds session events into the handler registry"""

    def __init__(self, client: SessionClient, registry: HandlerRegistry):
        self.client = client
        self.registry = registry
        self._tasks: Set[asyncio.Task] = set()
        self._loop_task: Optional[asyncio.Task] = None
        self._on_failure: Optional[Callable[[Exception], None]] = None

        self.stats = {
            "events_received": 0,
        }

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, event) -> asyncio.Task:
        """Schedule one event for handling"""
        self.stats["events_received"] += 1
        task = asyncio.create_task(
            self.registry.dispatch(event),
            name=f"session-{event.type.value}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run(self):
        """
        Consume events until the client's stream ends.

        A failing stream is reported to the ``on_failure`` callback given to
        ``start``; without one the exception propagates.
        """
        logger.info("📡 Session dispatcher started")
        try:
            async for event in self.client.events():
                self.submit(event)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"❌ Session event stream failed: {e}", exc_info=True)
            if self._on_failure is None:
                raise
            self._on_failure(e)
            return
        logger.info("Session event stream ended")

    def start(self, on_failure: Optional[Callable[[Exception], None]] = None) -> asyncio.Task:
        self._on_failure = on_failure
        self._loop_task = asyncio.create_task(self.run(), name="session-dispatcher")
        return self._loop_task

    async def drain(self):
        """Wait for the handlers currently in flight (used by tests)"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def stop(self):
        """Stop reading events and abandon handlers in flight"""
        if self._loop_task and not self._loop_task.done():
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass

        abandoned = len(self._tasks)
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        if abandoned:
            logger.info(f"🛑 Abandoned {abandoned} handler sequence(s) in flight")
