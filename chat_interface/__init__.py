"""
Chat Interface - session policy of the greeter bot

Architecture:
- handlers: reactions to session events (scan, login, logout, error, message, friendship)
- middleware: error boundary around every handler
- handler_registry: explicit EventType -> handler table
- dispatcher: single loop over the session client's events
- lifecycle: startup and graceful shutdown
- controller: composition root (import chat_interface.controller)
- states: session state
- config: keywords and message templates
- clients: platform adapters
"""

from .states import SessionState, SessionPhase
from .handler_registry import HandlerRegistry
from .dispatcher import SessionDispatcher
from .handlers import SessionHandlers, MessageHandlers, FriendshipHandlers
from .middleware import ErrorBoundaryMiddleware

__all__ = [
    "SessionState",
    "SessionPhase",
    "HandlerRegistry",
    "SessionDispatcher",
    "SessionHandlers",
    "MessageHandlers",
    "FriendshipHandlers",
    "ErrorBoundaryMiddleware",
]
