"""
Operator Interface - local console and HTTP observer endpoint

Modules:
- console: stdin commands (logs / logout / exit)
- web_app: FastAPI application with the SSE event stream
- web_server: uvicorn server embedded in the bot's event loop
- page: HTML page served at /
"""

from .console import OperatorConsole
from .web_app import create_app
from .web_server import WebServer

__all__ = [
    "OperatorConsole",
    "create_app",
    "WebServer",
]
