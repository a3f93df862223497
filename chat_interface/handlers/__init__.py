"""
Handlers - reactions to session events

Modules:
- session_handlers: scan / login / logout / error
- message_handlers: inbound messages and the group invite
- friendship_handlers: friend request acceptance and welcome
"""

from .session_handlers import SessionHandlers
from .message_handlers import MessageHandlers
from .friendship_handlers import FriendshipHandlers

__all__ = [
    "SessionHandlers",
    "MessageHandlers",
    "FriendshipHandlers",
]
