"""
Broadcast Hub - fan-out of session notifications to live observers

Each observer is an open outbound channel (an SSE connection) backed by a
bounded ``asyncio.Queue``. ``broadcast`` never awaits: it drops the
notification into every queue with ``put_nowait`` so the session loop is
never blocked by a slow browser. An observer whose queue is full or that
has already been closed is removed on the spot.

Usage:
    hub = BroadcastHub(enabled=True)

    observer = hub.subscribe()
    try:
        async for frame in observer.stream():
            yield frame
    finally:
        hub.unsubscribe(observer)

    hub.broadcast(Notification(NotificationKind.LOGIN, "alice"))
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import AsyncIterator, Dict, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_OBSERVER_QUEUE_SIZE = 256


class NotificationKind(str, Enum):
    """Notification types understood by the browser page"""
    QRCODE = "qrcode"
    LOGIN = "login"
    LOGOUT = "logout"
    LOG = "log"


@dataclass(frozen=True)
class Notification:
    """Transient typed message, never stored"""
    kind: NotificationKind
    payload: str

    def to_record(self) -> Dict[str, str]:
        return {"type": self.kind.value, "message": self.payload}


def encode_sse(notification: Notification) -> str:
    """Serialize a notification as one SSE ``data:`` frame"""
    return f"data: {json.dumps(notification.to_record(), ensure_ascii=False)}\n\n"


_observer_ids = count(1)


class Observer:
    """Handle to one live outbound channel"""

    def __init__(self, max_queue_size: int = DEFAULT_OBSERVER_QUEUE_SIZE):
        self.observer_id = next(_observer_ids)
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, notification: Notification) -> None:
        """
        Queue a notification for delivery.

        Raises:
            ConnectionError: the channel is already closed
            asyncio.QueueFull: the consumer stopped draining the channel
        """
        if self._closed:
            raise ConnectionError(f"observer {self.observer_id} is closed")
        self._queue.put_nowait(notification)

    def close(self) -> None:
        """Mark the channel closed and wake up a pending reader"""
        if self._closed:
            return
        self._closed = True
        # Discard undelivered notifications, then leave a wake-up sentinel
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(None)

    async def next_notification(self) -> Optional[Notification]:
        """Wait for the next notification; ``None`` once closed"""
        if self._closed:
            return None
        notification = await self._queue.get()
        if self._closed:
            return None
        return notification

    async def stream(self) -> AsyncIterator[str]:
        """Yield encoded SSE frames until the channel closes"""
        while True:
            notification = await self.next_notification()
            if notification is None:
                return
            yield encode_sse(notification)

    def __repr__(self) -> str:
        return f"<Observer id={self.observer_id} closed={self._closed}>"


class BroadcastHub:
    """
    Registry of live observers with non-blocking fan-out

    Supports:
    - subscribe / idempotent unsubscribe
    - fire-and-forget delivery per observer
    - implicit disconnect on failed delivery
    - global disable switch (no HTTP endpoint, nobody to notify)
    """

    def __init__(
        self,
        enabled: bool = True,
        max_queue_size: int = DEFAULT_OBSERVER_QUEUE_SIZE
    ):
        self.enabled = enabled
        self.max_queue_size = max_queue_size
        self._observers: Set[Observer] = set()

        self.stats = {
            "notifications_broadcast": 0,
            "deliveries": 0,
            "dropped_observers": 0
        }

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def __contains__(self, observer: Observer) -> bool:
        return observer in self._observers

    def subscribe(self) -> Observer:
        """Register a new live channel"""
        observer = Observer(max_queue_size=self.max_queue_size)
        self._observers.add(observer)
        logger.debug(f"Observer {observer.observer_id} subscribed ({len(self._observers)} total)")
        return observer

    def unsubscribe(self, observer: Observer) -> None:
        """Remove a channel; removing a non-member is a no-op"""
        if observer not in self._observers:
            return
        self._observers.discard(observer)
        observer.close()
        logger.debug(f"Observer {observer.observer_id} unsubscribed ({len(self._observers)} total)")

    def broadcast(self, notification: Notification) -> int:
        """
        Deliver a notification to every subscribed observer.

        Returns:
            Number of observers the notification was queued for
        """
        if not self.enabled or not self._observers:
            return 0

        self.stats["notifications_broadcast"] += 1
        delivered = 0

        for observer in list(self._observers):
            try:
                observer.push(notification)
                delivered += 1
            except (asyncio.QueueFull, ConnectionError) as e:
                logger.warning(f"Dropping observer {observer.observer_id}: {type(e).__name__}")
                self.stats["dropped_observers"] += 1
                self.unsubscribe(observer)

        self.stats["deliveries"] += delivered
        return delivered

    def close_all(self) -> None:
        """Disconnect every observer (shutdown)"""
        for observer in list(self._observers):
            self.unsubscribe(observer)
