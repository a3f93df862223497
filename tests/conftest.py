"""
Shared fixtures
"""

import pytest

from core.broadcast_hub import BroadcastHub
from core.config import BotConfig
from core.event_log import EventLog
from chat_interface.states import SessionState

from tests.fakes import FakeRoom, FakeSessionClient


@pytest.fixture
def hub():
    return BroadcastHub(enabled=True)


@pytest.fixture
def event_log(hub):
    return EventLog(hub=hub)


@pytest.fixture
def state():
    return SessionState()


@pytest.fixture
def bot_config():
    return BotConfig(who_am_i="小助手", target_group_name="测试群", action_delay_ms=3000)


@pytest.fixture
def room(bot_config):
    return FakeRoom(bot_config.target_group_name)


@pytest.fixture
def client(room):
    return FakeSessionClient(room=room)
