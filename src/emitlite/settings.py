from __future__ import annotations

import threading
from dataclasses import dataclass

_GLOBAL_EMITLITE_SETTINGS: EmitterSettings | None = None
_SETTINGS_LOCK = threading.RLock()


@dataclass(frozen=True)
class EmitterSettings:
    """Default configuration picked up by newly created registries."""

    delimiter: str = "."
    """Separator used to split event names into namespace segments."""

    max_listeners: int = 10
    """
    Number of listeners a single event path may hold before a leak warning is logged.

    A value of 0 disables the warning.
    """


def get_global_settings() -> EmitterSettings:
    """
    Get the global emitlite settings instance (thread-safe).

    If no global settings have been set, returns a default instance.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_EMITLITE_SETTINGS
        if _GLOBAL_EMITLITE_SETTINGS is None:
            _GLOBAL_EMITLITE_SETTINGS = EmitterSettings()
        return _GLOBAL_EMITLITE_SETTINGS


def set_global_settings(settings: EmitterSettings) -> None:
    """
    Set the global emitlite settings instance (thread-safe).

    Note: Settings are copied into each registry when it is created. Registries that already
    exist keep the values they started with.

    Args:
        settings (EmitterSettings): Settings to set as global.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_EMITLITE_SETTINGS
        _GLOBAL_EMITLITE_SETTINGS = settings
