"""
Lifecycle Management - start, run and stop the bot

Modules:
- bot_lifecycle: signal handling, background tasks, graceful shutdown
"""

from .bot_lifecycle import BotLifecycle

__all__ = ["BotLifecycle"]
