"""
Web Server - uvicorn running inside the bot's event loop
"""

import asyncio
import contextlib
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from core.broadcast_hub import BroadcastHub
from core.event_log import EventLog

logger = logging.getLogger(__name__)


class _EmbeddedServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the bot lifecycle"""

    @contextlib.contextmanager
    def capture_signals(self):
        yield

    def install_signal_handlers(self) -> None:
        pass


class WebServer:
    """Serves the operator app until the bot shuts down"""

    def __init__(
        self,
        app: FastAPI,
        hub: BroadcastHub,
        event_log: EventLog,
        host: str = "0.0.0.0",
        port: int = 3000
    ):
        self.app = app
        self.hub = hub
        self.event_log = event_log
        self.host = host
        self.port = port

        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            log_level="info",
            lifespan="off",
            reload=False
        )
        self.server = _EmbeddedServer(config)
        self._task: Optional[asyncio.Task] = None

    async def _serve(self):
        try:
            await self.server.serve()
        except Exception as e:
            self.event_log.server_error(f"HTTP 服务异常：{e}")
            logger.error(f"HTTP server crashed: {e}", exc_info=True)

    def start(self) -> asyncio.Task:
        self.event_log.server(f"HTTP 服务启动于 http://{self.host}:{self.port}")
        self._task = asyncio.create_task(self._serve(), name="operator-http")
        return self._task

    async def stop(self):
        if self._task is None:
            return

        # Open SSE streams would otherwise keep uvicorn waiting
        self.hub.close_all()
        self.server.should_exit = True
        try:
            await asyncio.wait_for(self._task, timeout=5.0)
        except asyncio.TimeoutError:
            self.server.force_exit = True
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self.event_log.server("HTTP 服务已停止")
