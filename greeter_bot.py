#!/usr/bin/env python3
"""
Greeter Bot - entry point

Greets new contacts, accepts friend requests and invites anyone who sends
"进群" / "入群" into the configured group chat.

Usage:
    WB_TARGET_GROUP_NAME="My Group" python greeter_bot.py
    # or
    greeter-bot
"""

import asyncio
import logging
import sys

from core.config import get_config
from core.exceptions import ConfigurationError
from core.logging import setup_logging

logger = logging.getLogger(__name__)


def build_client():
    """Default session client (python-wechaty)"""
    from chat_interface.clients.wechaty_client import WechatyClient
    return WechatyClient()


async def main(config=None, client=None):
    """
    Main entry point

    Creates the controller and runs it until shutdown.
    """
    from chat_interface.controller import GreeterController

    config = config or get_config()
    setup_logging(config)

    logger.info("=" * 50)
    logger.info("🚀 Greeter Bot")
    logger.info("=" * 50)

    controller = GreeterController(config, client or build_client())
    await controller.start()


def run():
    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e.message}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        logger.info("👋 Bot stopped by user")
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
