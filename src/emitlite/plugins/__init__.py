from emitlite.plugins.default import LoggingPlugin
from emitlite.plugins.default import get_logger

from .hooks.markers import hook_impl
from .manager import register_plugins
from .manager import register_plugins_entry_points
from .manager import unregister_plugins

__all__ = [
    "hook_impl",
    "LoggingPlugin",
    "get_logger",
    "register_plugins",
    "register_plugins_entry_points",
    "unregister_plugins",
]
