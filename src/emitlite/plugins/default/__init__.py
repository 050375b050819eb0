"""Default plugins shipped with emitlite."""

from emitlite.plugins.default.logging import LoggingPlugin
from emitlite.plugins.default.logging import get_logger

__all__ = [
    "LoggingPlugin",
    "get_logger",
]
