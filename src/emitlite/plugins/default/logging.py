"""
Logging plugin for event registry lifecycle events.

The plugin routes registry hooks (listener added/removed, leak warnings, emits) into Python's
standard logging system. `get_logger` returns an adapter that tags records written from inside
a listener with the event being dispatched.

Example:
    >>> import logging
    >>> from emitlite import EventRegistry
    >>> from emitlite.plugins.default import LoggingPlugin
    >>>
    >>> registry = EventRegistry(plugins=[LoggingPlugin(level=logging.DEBUG)])
    >>> registry.on("user.created", print).emit("user.created", "alice")
    alice
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, MutableMapping

from emitlite.context import get_current_emission
from emitlite.plugins.hooks.markers import hook_impl

if TYPE_CHECKING:
    from emitlite.registry import EventName
    from emitlite.registry import EventRegistry

DEFAULT_LOGGER_NAME = "emitlite.events"


def format_event(event: EventName | None) -> str:
    """Renders an event name (string or segment sequence) for log output."""
    if event is None:
        return "*"
    if isinstance(event, str):
        return event
    return "/".join(str(segment) for segment in event)


class _EventLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that injects the event being emitted into log records.

    Records get an `emitlite_event` attribute usable in formatters (e.g. "%(emitlite_event)s").
    Outside of a listener the attribute is set to "-".
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, dict[str, Any]]:
        """
        Process log call to inject emission context.

        Args:
            msg: Log message
            kwargs: Keyword arguments from log call

        Returns:
            Tuple of (message, modified kwargs with emission context)
        """
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra", {}))
        emission = get_current_emission()
        extra.setdefault("emitlite_event", format_event(emission.event) if emission else "-")
        kwargs["extra"] = extra
        return msg, dict(kwargs)


class LoggingPlugin:
    """
    Plugin that logs registry lifecycle events.

    Args:
        level: Level used for routine events (registration, removal, emission). Leak warnings
            are always logged at WARNING or above.
        logger_name: Name of the logger to write to. Defaults to "emitlite.events".
        format: Optional format string. When given, a stream handler with this format is
            attached to the logger unless one created by this plugin is already present.

    Examples:
        >>> import logging
        >>> from emitlite.plugins.default import LoggingPlugin
        >>> plugin = LoggingPlugin(level=logging.INFO)
    """

    def __init__(
        self,
        level: int = logging.DEBUG,
        logger_name: str | None = None,
        format: str | None = None,
    ):
        self._level = level
        self._logger = get_logger(logger_name)
        if format is not None:
            self._install_handler(format)

    @hook_impl
    def after_listener_added(
        self,
        registry: EventRegistry,
        event: EventName | None,
        listener: Callable[..., Any],
        count: int,
    ) -> None:
        self._logger.log(
            self._level,
            f"Added listener {_describe(listener)} to '{format_event(event)}' ({count} total)",
        )

    @hook_impl
    def after_listener_removed(
        self,
        registry: EventRegistry,
        event: EventName | None,
        listener: Callable[..., Any],
    ) -> None:
        self._logger.log(
            self._level, f"Removed listener {_describe(listener)} from '{format_event(event)}'"
        )

    @hook_impl
    def on_max_listeners_exceeded(
        self,
        registry: EventRegistry,
        event: EventName,
        count: int,
        max_listeners: int,
    ) -> None:
        self._logger.log(
            max(self._level, logging.WARNING),
            f"Event '{format_event(event)}' has {count} listeners (maximum is {max_listeners})",
        )

    @hook_impl
    def before_emit(self, registry: EventRegistry, event: EventName, listener_count: int) -> None:
        self._logger.log(
            self._level, f"Emitting '{format_event(event)}' to {listener_count} listener(s)"
        )

    @hook_impl
    def after_emit(self, registry: EventRegistry, event: EventName, listened: bool) -> None:
        if not listened:
            self._logger.log(self._level, f"Event '{format_event(event)}' had no listeners")

    def _install_handler(self, format: str) -> None:
        base_logger = self._logger.logger
        if any(isinstance(h, _PluginStreamHandler) for h in base_logger.handlers):
            return
        handler = _PluginStreamHandler()
        handler.setFormatter(logging.Formatter(format, defaults={"emitlite_event": "-"}))
        base_logger.addHandler(handler)
        if base_logger.getEffectiveLevel() > self._level:
            base_logger.setLevel(self._level)


class _PluginStreamHandler(logging.StreamHandler):
    """Stream handler attached by `LoggingPlugin` when a format is requested."""


def _describe(listener: Callable[..., Any]) -> str:
    origin = getattr(listener, "origin", listener)
    return getattr(origin, "__qualname__", None) or repr(origin)


def get_logger(name: str | None = None) -> logging.LoggerAdapter:
    """
    Get a logger that tags records with the event currently being emitted.

    Args:
        name: Logger name. If None, uses "emitlite.events". Typically use `__name__` inside
            listener modules.

    Returns:
        LoggerAdapter that adds `emitlite_event` to every record.

    Examples:
        >>> from emitlite.plugins.default import get_logger
        >>> logger = get_logger("my_app.listeners")
        >>> logger.logger.name
        'my_app.listeners'
    """
    if name is None:
        name = DEFAULT_LOGGER_NAME
    return _EventLoggerAdapter(logging.getLogger(name), {})
