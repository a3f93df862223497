"""
Unit Tests: Configuration

Tests:
- defaults
- required target group
- flag and integer parsing
"""

import pytest

from core.config import Config, DEFAULT_BOT_NAME
from core.exceptions import ConfigurationError


def test_defaults():
    config = Config({"WB_TARGET_GROUP_NAME": "测试群"})

    assert config.bot.who_am_i == DEFAULT_BOT_NAME
    assert config.bot.target_group_name == "测试群"
    assert config.bot.action_delay_ms == 3000
    assert config.bot.action_delay == 3.0
    assert config.console.enabled is True
    assert config.http.enabled is False
    assert config.http.port == 3000
    assert config.broadcasting_enabled is False
    assert str(config.log_timezone) == "Asia/Shanghai"


@pytest.mark.parametrize("environ", [
    {},
    {"WB_TARGET_GROUP_NAME": ""},
    {"WB_TARGET_GROUP_NAME": "   "},
])
def test_missing_target_group_is_fatal(environ):
    with pytest.raises(ConfigurationError) as exc_info:
        Config(environ)

    assert exc_info.value.variable == "WB_TARGET_GROUP_NAME"
    assert exc_info.value.code == "CONFIGURATION_ERROR"


def test_overrides():
    config = Config({
        "WB_TARGET_GROUP_NAME": "测试群",
        "WB_WHO_AM_I": "机器人",
        "WB_DISABLE_CONSOLE": "true",
        "WB_ENABLE_HTTP": "1",
        "WB_HTTP_PORT": "8080",
        "WB_ACTION_DELAY_MS": "500",
        "WB_LOG_TIMEZONE": "UTC",
        "LOG_DIR": "",
    })

    assert config.bot.who_am_i == "机器人"
    assert config.console.enabled is False
    assert config.http.enabled is True
    assert config.http.port == 8080
    assert config.bot.action_delay == 0.5
    assert config.broadcasting_enabled is True
    assert str(config.log_timezone) == "UTC"
    assert config.logging["file_path"] is None


@pytest.mark.parametrize("value,expected", [
    ("yes", True),
    ("ON", True),
    ("0", False),
    ("false", False),
    ("", False),
])
def test_boolean_flags(value, expected):
    config = Config({"WB_TARGET_GROUP_NAME": "g", "WB_ENABLE_HTTP": value})

    assert config.http.enabled is expected


@pytest.mark.parametrize("environ", [
    {"WB_HTTP_PORT": "eighty"},
    {"WB_ACTION_DELAY_MS": "-1"},
    {"WB_LOG_TIMEZONE": "Mars/Olympus_Mons"},
])
def test_invalid_values(environ):
    with pytest.raises(ConfigurationError):
        Config({"WB_TARGET_GROUP_NAME": "g", **environ})
