"""
Operator Console - line commands from standard input

Commands:
- logs: dump formatted chat, debug and server logs
- logout: log the bot account out
- exit: graceful shutdown
"""

import asyncio
import logging
import sys
from typing import Awaitable, Callable, Optional

from core.event_log import EventLog, LogCategory

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: logs | logout | exit"

# Order of sections in the ``logs`` dump
DUMP_CATEGORIES = (
    LogCategory.CHAT,
    LogCategory.DEBUG_LOG,
    LogCategory.DEBUG_ERROR,
    LogCategory.SERVER_LOG,
    LogCategory.SERVER_ERROR,
)


class OperatorConsole:
    """Reads commands from stdin and routes them to the controller"""

    def __init__(
        self,
        event_log: EventLog,
        request_logout: Callable[[], Awaitable[None]],
        request_exit: Callable[[], Awaitable[None]],
        write: Callable[[str], None] = print,
        write_error: Optional[Callable[[str], None]] = None
    ):
        self.event_log = event_log
        self.request_logout = request_logout
        self.request_exit = request_exit
        self.write = write
        self.write_error = write_error or (lambda text: print(text, file=sys.stderr))
        self._task: Optional[asyncio.Task] = None

    def dump_logs(self) -> int:
        """Print every journal category; errors go to stderr"""
        lines = 0
        for category in DUMP_CATEGORIES:
            out = self.write_error if category.is_error else self.write
            for line in self.event_log.render_formatted(category):
                out(line)
                lines += 1
        return lines

    async def handle_command(self, line: str) -> bool:
        """
        Execute one console line.

        Returns:
            False once the console should stop reading
        """
        command = line.strip()
        if not command:
            return True

        if command == "logs":
            self.dump_logs()
        elif command == "logout":
            try:
                await self.request_logout()
            except Exception as e:
                self.event_log.server_error(f"登出失败：{e}")
        elif command == "exit":
            await self.request_exit()
            return False
        else:
            self.write(HELP_TEXT)

        return True

    async def _open_stdin(self) -> asyncio.StreamReader:
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        protocol = asyncio.StreamReaderProtocol(reader)
        await loop.connect_read_pipe(lambda: protocol, sys.stdin)
        return reader

    async def run(self, reader: Optional[asyncio.StreamReader] = None):
        """Read commands until EOF or ``exit``"""
        if reader is None:
            reader = await self._open_stdin()

        logger.info(f"⌨️  Console ready. {HELP_TEXT}")
        while True:
            raw = await reader.readline()
            if not raw:
                logger.info("Console input closed")
                return
            if not await self.handle_command(raw.decode("utf-8", errors="replace")):
                return

    def start(self) -> asyncio.Task:
        self._task = asyncio.create_task(self.run(), name="operator-console")
        return self._task

    async def stop(self):
        if self._task and not self._task.done() and self._task is not asyncio.current_task():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
