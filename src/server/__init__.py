"""UI server module for static web UI and websocket streaming."""

from .config import ServerConfigurationError, UIServerConfig
from .service import CommandHandler, UIServer

__all__ = [
    "CommandHandler",
    "ServerConfigurationError",
    "UIServerConfig",
    "UIServer",
]
