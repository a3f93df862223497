"""
Error Boundary Middleware - keep the session alive when a handler fails

A failed room lookup, member add or send surfaces through the same path
as an ``error`` event reported by the session client: one debug-error
journal entry. Nothing is retried and nothing propagates to the dispatcher.
"""

import logging
from typing import Any, Awaitable, Callable

from core.service_protocols import ErrorEvent, SessionEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[SessionEvent], Awaitable[Any]]


class ErrorBoundaryMiddleware:
    """
    Middleware that converts handler exceptions into error events

    Args:
        on_error: Handler for ErrorEvent (usually SessionHandlers.on_error)
    """

    def __init__(self, on_error: Callable[[ErrorEvent], Awaitable[Any]]):
        self.on_error = on_error
        self.failures = 0

    async def __call__(self, handler: EventHandler, event: SessionEvent) -> Any:
        try:
            return await handler(event)
        except Exception as e:
            self.failures += 1
            handler_name = getattr(handler, "__name__", None) or getattr(
                getattr(handler, "func", None), "__name__", "unknown"
            )
            logger.error(
                f"❌ Handler {handler_name} failed on {event.type.value} event: {e}",
                exc_info=True
            )

            if isinstance(event, ErrorEvent):
                # The error path itself failed; nothing left to report to
                return None

            await self.on_error(ErrorEvent(error=e))
            return None
