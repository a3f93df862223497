"""
Unit Tests: Friendship Handlers

Tests:
- accept after the first delay, welcome after the second
- welcome template carries bot and group names
- journal entries for each step
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from core.event_log import LogCategory
from core.service_protocols import FriendshipEvent
from chat_interface.handlers import FriendshipHandlers

from tests.fakes import FakeContact, FakeFriendship


@pytest.fixture
def request_from_carol():
    return FakeFriendship(FakeContact("carol"))


# ============================================================================
# SEQUENCE TESTS
# ============================================================================

@pytest.mark.asyncio
async def test_friendship_sequence(event_log, bot_config, request_from_carol):
    calls = []
    contact = request_from_carol.contact

    async def fake_sleep(seconds):
        calls.append(("sleep", seconds, request_from_carol.accept.await_count, contact.say.await_count))

    await FriendshipHandlers.on_friendship(
        FriendshipEvent(request_from_carol),
        event_log=event_log,
        who_am_i=bot_config.who_am_i,
        target_group_name=bot_config.target_group_name,
        action_delay=bot_config.action_delay,
        sleep=fake_sleep
    )

    # Nothing happens before the first delay, accept happens before the second
    assert calls == [("sleep", 3.0, 0, 0), ("sleep", 3.0, 1, 0)]
    request_from_carol.accept.assert_awaited_once()
    contact.say.assert_awaited_once()

    welcome = contact.say.await_args.args[0]
    assert bot_config.who_am_i in welcome
    assert bot_config.target_group_name in welcome
    assert "进群" in welcome

    texts = [e.text for e in event_log.entries(LogCategory.DEBUG_LOG)]
    assert texts == [
        "接收到好友请求：carol",
        "已接受好友请求：carol",
        "已向好友 carol 发送欢迎消息",
    ]


@pytest.mark.asyncio
async def test_friendship_waits_real_delay(event_log, bot_config, request_from_carol):
    task = asyncio.create_task(FriendshipHandlers.on_friendship(
        FriendshipEvent(request_from_carol),
        event_log=event_log,
        who_am_i=bot_config.who_am_i,
        target_group_name=bot_config.target_group_name,
        action_delay=0.05
    ))

    await asyncio.sleep(0.01)
    request_from_carol.accept.assert_not_awaited()

    await asyncio.wait_for(task, timeout=2)
    request_from_carol.accept.assert_awaited_once()
    request_from_carol.contact.say.assert_awaited_once()


@pytest.mark.asyncio
async def test_cancelled_sequence_is_abandoned(event_log, bot_config, request_from_carol):
    task = asyncio.create_task(FriendshipHandlers.on_friendship(
        FriendshipEvent(request_from_carol),
        event_log=event_log,
        who_am_i=bot_config.who_am_i,
        target_group_name=bot_config.target_group_name,
        action_delay=10
    ))
    await asyncio.sleep(0)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    request_from_carol.accept.assert_not_awaited()
    request_from_carol.contact.say.assert_not_awaited()


@pytest.mark.asyncio
async def test_accept_failure_stops_sequence(event_log, bot_config, request_from_carol):
    request_from_carol.accept = AsyncMock(side_effect=RuntimeError("already friends"))

    with pytest.raises(RuntimeError):
        await FriendshipHandlers.on_friendship(
            FriendshipEvent(request_from_carol),
            event_log=event_log,
            who_am_i=bot_config.who_am_i,
            target_group_name=bot_config.target_group_name,
            action_delay=0,
        )

    request_from_carol.contact.say.assert_not_awaited()
