"""
Wechaty Client - python-wechaty adapter for the session client protocol

Wechaty delivers events through ``on_*`` hooks; the adapter turns each
hook call into a tagged session event on an ``asyncio.Queue`` and wraps
contacts, rooms and messages so the handlers never touch SDK types.

Requires the ``wechaty`` extra and a puppet service token
(``WECHATY_PUPPET_SERVICE_TOKEN``) in the environment.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from wechaty import Wechaty, WechatyOptions
from wechaty_puppet import MessageType, ScanStatus as WechatyScanStatus

from core.exceptions import SessionClientError
from core.service_protocols import (
    ScanStatus,
    MessageKind,
    SessionEvent,
    ScanEvent,
    LoginEvent,
    LogoutEvent,
    ErrorEvent,
    MessageEvent,
    FriendshipEvent
)

logger = logging.getLogger(__name__)

_STREAM_END = object()


def _scan_status(status) -> ScanStatus:
    try:
        return ScanStatus(status.name.lower())
    except (AttributeError, ValueError):
        return ScanStatus.UNKNOWN


def _message_kind(message_type) -> MessageKind:
    name = getattr(message_type, "name", "")
    if name.startswith("MESSAGE_TYPE_"):
        name = name[len("MESSAGE_TYPE_"):]
    try:
        return MessageKind(name.lower())
    except ValueError:
        return MessageKind.UNKNOWN


class WechatyContact:
    def __init__(self, contact):
        self.raw = contact

    @property
    def name(self) -> str:
        return self.raw.name

    async def say(self, text: str) -> None:
        await self.raw.say(text)


class WechatyRoom:
    def __init__(self, room, topic: str):
        self.raw = room
        self._topic = topic

    @property
    def topic(self) -> str:
        return self._topic

    async def add(self, contact) -> None:
        await self.raw.add(getattr(contact, "raw", contact))

    async def say(self, text: str) -> None:
        await self.raw.say(text)


class WechatyMessage:
    def __init__(self, message):
        self.raw = message
        self._sender = WechatyContact(message.talker())

    @property
    def kind(self) -> MessageKind:
        return _message_kind(self.raw.type())

    @property
    def sender(self) -> WechatyContact:
        return self._sender

    @property
    def text(self) -> str:
        return self.raw.text()


class WechatyFriendship:
    def __init__(self, friendship):
        self.raw = friendship
        self._contact = WechatyContact(friendship.contact())

    @property
    def contact(self) -> WechatyContact:
        return self._contact

    async def accept(self) -> None:
        await self.raw.accept()


class _EventBridgeBot(Wechaty):
    """Wechaty subclass forwarding every hook to the adapter queue"""

    def __init__(self, queue: asyncio.Queue, options: Optional[WechatyOptions] = None):
        super().__init__(options)
        self._events = queue

    async def on_scan(self, qr_code: str, status: WechatyScanStatus, data: Optional[str] = None):
        self._events.put_nowait(ScanEvent(code=qr_code, status=_scan_status(status)))

    async def on_login(self, contact):
        self._events.put_nowait(LoginEvent(identity=WechatyContact(contact)))

    async def on_logout(self, contact):
        self._events.put_nowait(LogoutEvent(identity=WechatyContact(contact)))

    async def on_error(self, payload):
        self._events.put_nowait(ErrorEvent(error=getattr(payload, "data", payload)))

    async def on_message(self, msg):
        self._events.put_nowait(MessageEvent(message=WechatyMessage(msg)))

    async def on_friendship(self, friendship):
        self._events.put_nowait(FriendshipEvent(request=WechatyFriendship(friendship)))


class WechatyClient:
    """Session client backed by python-wechaty"""

    def __init__(self, options: Optional[WechatyOptions] = None):
        self._queue: asyncio.Queue = asyncio.Queue()
        self.bot = _EventBridgeBot(self._queue, options)

    async def events(self) -> AsyncIterator[SessionEvent]:
        while True:
            event = await self._queue.get()
            if event is _STREAM_END:
                return
            yield event

    async def find_room(self, topic: str) -> Optional[WechatyRoom]:
        room = await self.bot.Room.find(topic)
        if room is None:
            return None
        return WechatyRoom(room, topic)

    async def start(self) -> None:
        logger.info("Starting wechaty session")
        try:
            await self.bot.start()
        except Exception as e:
            raise SessionClientError("start", str(e)) from e

    async def stop(self) -> None:
        try:
            await self.bot.stop()
        finally:
            self._queue.put_nowait(_STREAM_END)

    async def logout(self) -> None:
        await self.bot.logout()
