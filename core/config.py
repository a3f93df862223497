"""
Centralized Configuration Management for the greeter bot
"""
import os
from typing import Dict, Any, Optional, Mapping
from pathlib import Path
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_BOT_NAME = "小助手"
DEFAULT_HTTP_PORT = 3000
DEFAULT_ACTION_DELAY_MS = 3000
DEFAULT_LOG_TIMEZONE = "Asia/Shanghai"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class BotConfig:
    """Bot identity and business rules"""
    who_am_i: str
    target_group_name: str
    action_delay_ms: int = DEFAULT_ACTION_DELAY_MS

    @property
    def action_delay(self) -> float:
        """Friendship action delay in seconds"""
        return self.action_delay_ms / 1000


@dataclass
class ConsoleConfig:
    """Console sink configuration"""
    enabled: bool = True


@dataclass
class HttpConfig:
    """Operator HTTP endpoint configuration"""
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = DEFAULT_HTTP_PORT


def _env_bool(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    value = environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    value = environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(name, f"expected an integer, got {value!r}")


class Config:
    """Main configuration class"""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        if environ is None:
            environ = os.environ

        target_group_name = (environ.get("WB_TARGET_GROUP_NAME") or "").strip()
        if not target_group_name:
            raise ConfigurationError("WB_TARGET_GROUP_NAME")

        # Bot identity
        self.bot = BotConfig(
            who_am_i=(environ.get("WB_WHO_AM_I") or "").strip() or DEFAULT_BOT_NAME,
            target_group_name=target_group_name,
            action_delay_ms=_env_int(environ, "WB_ACTION_DELAY_MS", DEFAULT_ACTION_DELAY_MS)
        )
        if self.bot.action_delay_ms < 0:
            raise ConfigurationError("WB_ACTION_DELAY_MS", "must not be negative")

        # Operator surfaces
        self.console = ConsoleConfig(
            enabled=not _env_bool(environ, "WB_DISABLE_CONSOLE")
        )
        self.http = HttpConfig(
            enabled=_env_bool(environ, "WB_ENABLE_HTTP"),
            host=environ.get("WB_HTTP_HOST") or "0.0.0.0",
            port=_env_int(environ, "WB_HTTP_PORT", DEFAULT_HTTP_PORT)
        )

        # Formatted logs are rendered in one reference zone for every deployment
        zone_name = environ.get("WB_LOG_TIMEZONE") or DEFAULT_LOG_TIMEZONE
        try:
            self.log_timezone = ZoneInfo(zone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ConfigurationError("WB_LOG_TIMEZONE", f"unknown time zone {zone_name!r}")

        # Logging configuration
        log_dir = environ.get("LOG_DIR", "logs")
        self.logging = {
            "level": environ.get("LOG_LEVEL", "INFO"),
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file_path": Path(log_dir) if log_dir else None,
            "max_file_size": 10 * 1024 * 1024,  # 10MB
            "backup_count": 5
        }

    @property
    def broadcasting_enabled(self) -> bool:
        """Notifications are only fanned out when somebody can observe them"""
        return self.http.enabled

    def summary(self) -> Dict[str, Any]:
        """Non-secret settings for the startup banner"""
        return {
            "who_am_i": self.bot.who_am_i,
            "target_group_name": self.bot.target_group_name,
            "action_delay_ms": self.bot.action_delay_ms,
            "console": self.console.enabled,
            "http": f"{self.http.host}:{self.http.port}" if self.http.enabled else "disabled",
            "log_timezone": str(self.log_timezone),
        }


# Global configuration instance, created on first use
config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance"""
    global config
    if config is None:
        load_dotenv()
        config = Config()
    return config
