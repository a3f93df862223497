"""
Unit Tests: Handler Registry and Error Boundary

Tests:
- one handler per event type
- dispatch routes events to the right handler
- handler failures become debug-error entries, never exceptions
"""

import pytest

from core.event_log import LogCategory
from core.service_protocols import (
    EventType,
    ErrorEvent,
    LoginEvent,
    MessageEvent,
    FriendshipEvent
)
from chat_interface.handler_registry import HandlerRegistry

from tests.fakes import FakeContact, FakeMessage, FakeFriendship


async def _no_sleep(seconds):
    return None


@pytest.fixture
def registry(client, state, event_log, hub, bot_config):
    return HandlerRegistry(
        client=client,
        state=state,
        event_log=event_log,
        hub=hub,
        bot_config=bot_config,
        console_enabled=False,
        sleep=_no_sleep
    ).register_all()


# ============================================================================
# REGISTRATION TESTS
# ============================================================================

def test_every_event_type_has_a_handler(registry):
    assert set(registry.handlers) == set(EventType)


@pytest.mark.asyncio
async def test_dispatch_registers_lazily(client, state, event_log, hub, bot_config):
    registry = HandlerRegistry(
        client=client,
        state=state,
        event_log=event_log,
        hub=hub,
        bot_config=bot_config,
        console_enabled=False
    )

    await registry.dispatch(LoginEvent(FakeContact("alice")))

    assert state.logged_in_name == "alice"


# ============================================================================
# DISPATCH TESTS
# ============================================================================

@pytest.mark.asyncio
async def test_dispatch_login(registry, state):
    await registry.dispatch(LoginEvent(FakeContact("alice")))

    assert state.logged_in_name == "alice"


@pytest.mark.asyncio
async def test_dispatch_message_invites(registry, room):
    sender = FakeContact("bob")

    await registry.dispatch(MessageEvent(FakeMessage(sender, "进群")))

    room.add.assert_awaited_once_with(sender)


@pytest.mark.asyncio
async def test_dispatch_friendship_uses_injected_sleep(registry):
    request = FakeFriendship(FakeContact("carol"))

    await registry.dispatch(FriendshipEvent(request))

    request.accept.assert_awaited_once()
    request.contact.say.assert_awaited_once()


# ============================================================================
# ERROR BOUNDARY TESTS
# ============================================================================

@pytest.mark.asyncio
async def test_lookup_failure_becomes_error_entry(registry, client, event_log):
    client.find_room.side_effect = RuntimeError("lookup timed out")

    result = await registry.dispatch(MessageEvent(FakeMessage(FakeContact("bob"), "进群")))

    assert result is None
    (entry,) = event_log.entries(LogCategory.DEBUG_ERROR)
    assert "lookup timed out" in entry.text
    assert registry.error_boundary.failures == 1


@pytest.mark.asyncio
async def test_add_failure_becomes_error_entry(registry, room, event_log):
    room.add.side_effect = RuntimeError("not allowed")

    await registry.dispatch(MessageEvent(FakeMessage(FakeContact("bob"), "入群")))

    room.say.assert_not_awaited()
    assert len(event_log.entries(LogCategory.DEBUG_ERROR)) == 1


@pytest.mark.asyncio
async def test_session_continues_after_failure(registry, client, room, event_log):
    client.find_room.side_effect = [RuntimeError("flaky"), room]

    await registry.dispatch(MessageEvent(FakeMessage(FakeContact("bob"), "进群")))
    await registry.dispatch(MessageEvent(FakeMessage(FakeContact("dave"), "进群")))

    assert client.find_room.await_count == 2
    room.add.assert_awaited_once()


@pytest.mark.asyncio
async def test_error_event_dispatch(registry, event_log):
    await registry.dispatch(ErrorEvent("puppet disconnected"))

    (entry,) = event_log.entries(LogCategory.DEBUG_ERROR)
    assert "puppet disconnected" in entry.text
