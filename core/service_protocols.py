"""
Session Client Protocols - interfaces between the bot core and the messaging platform

The bot never talks to the platform SDK directly. Adapters translate the
SDK's callbacks into the tagged session events below and wrap its
contact/room/message objects so they satisfy these protocols.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Optional, Protocol, Union, runtime_checkable


class ScanStatus(str, Enum):
    """QR challenge status reported by the platform"""
    UNKNOWN = "unknown"
    CANCEL = "cancel"
    WAITING = "waiting"
    SCANNED = "scanned"
    CONFIRMED = "confirmed"
    TIMEOUT = "timeout"


class MessageKind(str, Enum):
    """Message type tag; only TEXT is acted upon"""
    UNKNOWN = "unknown"
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    EMOTICON = "emoticon"
    ATTACHMENT = "attachment"
    CONTACT = "contact"
    URL = "url"
    MINI_PROGRAM = "mini_program"
    RECALLED = "recalled"
    SYSTEM = "system"


class EventType(str, Enum):
    SCAN = "scan"
    LOGIN = "login"
    LOGOUT = "logout"
    ERROR = "error"
    MESSAGE = "message"
    FRIENDSHIP = "friendship"


@runtime_checkable
class Identity(Protocol):
    """A contact or the logged-in user"""

    @property
    def name(self) -> str: ...


@runtime_checkable
class Contact(Identity, Protocol):
    """An identity that can be messaged directly"""

    async def say(self, text: str) -> None: ...


@runtime_checkable
class Room(Protocol):
    """A group chat"""

    @property
    def topic(self) -> str: ...

    async def add(self, contact: Identity) -> None: ...

    async def say(self, text: str) -> None: ...


@runtime_checkable
class ChatMessage(Protocol):

    @property
    def kind(self) -> MessageKind: ...

    @property
    def sender(self) -> Contact: ...

    @property
    def text(self) -> str: ...


@runtime_checkable
class FriendshipRequest(Protocol):

    @property
    def contact(self) -> Contact: ...

    async def accept(self) -> None: ...


# ============================================================================
# SESSION EVENTS
# ============================================================================

@dataclass(frozen=True)
class ScanEvent:
    code: str
    status: ScanStatus
    type: EventType = EventType.SCAN


@dataclass(frozen=True)
class LoginEvent:
    identity: Identity
    type: EventType = EventType.LOGIN


@dataclass(frozen=True)
class LogoutEvent:
    identity: Identity
    type: EventType = EventType.LOGOUT


@dataclass(frozen=True)
class ErrorEvent:
    error: Any
    type: EventType = EventType.ERROR


@dataclass(frozen=True)
class MessageEvent:
    message: ChatMessage
    type: EventType = EventType.MESSAGE


@dataclass(frozen=True)
class FriendshipEvent:
    request: FriendshipRequest
    type: EventType = EventType.FRIENDSHIP


SessionEvent = Union[ScanEvent, LoginEvent, LogoutEvent, ErrorEvent, MessageEvent, FriendshipEvent]


class SessionClient(Protocol):
    """Messaging-platform session consumed by the bot"""

    def events(self) -> AsyncIterator[SessionEvent]:
        """Stream of session events; ends when the client stops"""
        ...

    async def find_room(self, topic: str) -> Optional[Room]:
        """Look up a group chat by name"""
        ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...

    async def logout(self) -> None: ...
