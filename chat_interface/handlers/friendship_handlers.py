"""
Friendship Handlers - auto-accept friend requests

The request is accepted and the new contact greeted after a fixed pause
each, so the account does not answer faster than a person would. The
sequence is not cancellable; on shutdown it is abandoned where it stands.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from core.event_log import EventLog
from core.service_protocols import FriendshipEvent

from ..config import (
    FRIEND_WELCOME_TEMPLATE,
    LOG_FRIENDSHIP_RECEIVED,
    LOG_FRIENDSHIP_ACCEPTED,
    LOG_FRIENDSHIP_WELCOMED
)

logger = logging.getLogger(__name__)


class FriendshipHandlers:
    """Handlers for friend requests"""

    @staticmethod
    async def on_friendship(
        event: FriendshipEvent,
        event_log: EventLog,
        who_am_i: str,
        target_group_name: str,
        action_delay: float,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        request = event.request
        contact = request.contact
        name = contact.name
        event_log.debug(LOG_FRIENDSHIP_RECEIVED.format(name=name))

        await sleep(action_delay)
        await request.accept()
        event_log.debug(LOG_FRIENDSHIP_ACCEPTED.format(name=name))

        await sleep(action_delay)
        await contact.say(FRIEND_WELCOME_TEMPLATE.format(
            who_am_i=who_am_i,
            group_name=target_group_name
        ))
        event_log.debug(LOG_FRIENDSHIP_WELCOMED.format(name=name))
