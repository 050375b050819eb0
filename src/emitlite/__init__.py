"""Emitlite: namespace-aware, in-process publish/subscribe registry."""

__version__ = "0.1.0"

from . import settings
from .context import Emission
from .context import get_current_emission
from .exceptions import EmitliteError
from .exceptions import InvalidArgumentError
from .listeners import ListenerList
from .plugins.manager import _initialize_plugin_system
from .registry import EventRegistry
from .trie import NamespaceTrie

# Initialize hooks system on module import
_initialize_plugin_system()

__all__ = [
    "EmitliteError",
    "Emission",
    "EventRegistry",
    "InvalidArgumentError",
    "ListenerList",
    "NamespaceTrie",
    "get_current_emission",
    "settings",
]
