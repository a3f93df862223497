"""
Message Handlers - inbound chat messages

Only plain text is acted upon. A text that is exactly one of the join
keywords starts the group invite; everything else is traced and dropped.
"""

import logging

from core.event_log import EventLog
from core.service_protocols import ChatMessage, MessageEvent, MessageKind, SessionClient

from ..config import (
    JOIN_KEYWORDS,
    ROOM_WELCOME_TEMPLATE,
    LOG_MESSAGE_TYPE,
    LOG_MESSAGE_SENDER,
    LOG_MESSAGE_TEXT,
    LOG_INVITED,
    LOG_ROOM_NOT_FOUND
)

logger = logging.getLogger(__name__)


class MessageHandlers:
    """Handlers for inbound messages"""

    @staticmethod
    async def on_message(
        event: MessageEvent,
        client: SessionClient,
        event_log: EventLog,
        target_group_name: str
    ):
        message = event.message
        name = message.sender.name

        event_log.chat(LOG_MESSAGE_TYPE.format(kind=message.kind.value))
        event_log.chat(LOG_MESSAGE_SENDER.format(name=name))

        if message.kind is not MessageKind.TEXT:
            return

        text = message.text
        event_log.chat(LOG_MESSAGE_TEXT.format(text=text))

        if text not in JOIN_KEYWORDS:
            return

        await MessageHandlers.invite_to_group(message, client, event_log, target_group_name)

    @staticmethod
    async def invite_to_group(
        message: ChatMessage,
        client: SessionClient,
        event_log: EventLog,
        target_group_name: str
    ) -> bool:
        """
        Add the sender of ``message`` to the target room and greet them there.

        Workflow:
        1. Look the room up by name (no retry)
        2. Missing room -> trace and stop
        3. Add the sender, trace the invite
        4. Welcome the sender inside the room

        Returns:
            True if the sender was added
        """
        sender = message.sender
        room = await client.find_room(target_group_name)

        if room is None:
            event_log.debug(LOG_ROOM_NOT_FOUND.format(group_name=target_group_name))
            return False

        await room.add(sender)
        event_log.debug(LOG_INVITED.format(name=sender.name, group_name=target_group_name))
        await room.say(ROOM_WELCOME_TEMPLATE.format(name=sender.name))
        return True
