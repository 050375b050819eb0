"""
Namespace-aware publish/subscribe registry.

Listeners are stored in a `NamespaceTrie` keyed by the segments of their event name, so
"a.b.c" lives at the path ("a", "b", "c"). Emission resolves the exact path only: listeners
registered for "a.b" never fire for "a" or "a.b.c". Listeners registered with `on_any` fire for
every emitted event, after the path listeners.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any, Union

from pluggy import PluginManager
from typing_extensions import Self

from emitlite.context import Emission
from emitlite.context import reset_current_emission
from emitlite.context import set_current_emission
from emitlite.exceptions import InvalidArgumentError
from emitlite.listeners import CountingListener
from emitlite.listeners import Listener
from emitlite.listeners import ListenerList
from emitlite.listeners import listener_matches
from emitlite.listeners import merge_listener_lists
from emitlite.listeners import validate_listener
from emitlite.plugins.manager import create_plugin_manager_with_plugins
from emitlite.plugins.manager import get_global_plugin_manager
from emitlite.settings import get_global_settings
from emitlite.trie import NamespaceTrie

logger = logging.getLogger(__name__)

EventName = Union[str, Sequence[str]]

NEW_LISTENER_EVENT = "newListener"


class EventRegistry:
    """
    Registry of listeners indexed by hierarchical event names.

    Every mutating method returns the registry so calls can be chained:

        >>> registry = EventRegistry()
        >>> seen = []
        >>> registry.on("a.b", seen.append).on_any(lambda *args: seen.append("any")).emit("a.b", 1)
        True
        >>> seen
        [1, 'any']

    Args:
        delimiter: Separator used to split event names. Defaults to the global settings.
        max_listeners: Listener count per path above which a leak warning is logged once.
            0 disables the warning. Defaults to the global settings.
        plugins: Plugin instances whose hooks observe this registry in addition to the
            globally registered plugins.
    """

    def __init__(
        self,
        *,
        delimiter: str | None = None,
        max_listeners: int | None = None,
        plugins: list[Any] | None = None,
    ) -> None:
        settings = get_global_settings()
        self._lock = threading.RLock()
        self._listeners_by_path: NamespaceTrie[ListenerList] = NamespaceTrie()
        self._any_listeners: ListenerList | None = None
        self._delimiter = settings.delimiter
        self._max_listeners = settings.max_listeners
        self._plugin_manager: PluginManager = (
            create_plugin_manager_with_plugins(plugins) if plugins else get_global_plugin_manager()
        )
        if delimiter is not None:
            self.set_delimiter(delimiter)
        if max_listeners is not None:
            self.set_max_listeners(max_listeners)

    # region Registration

    def add_listener(self, event: EventName, listener: Listener) -> Self:
        """
        Adds `listener` to the end of the listener list for `event`.

        A "newListener" event is emitted with `(event, listener)` before the listener is stored.

        Args:
            event: Event name, either a delimited string or a sequence of segments.
            listener: Callable invoked with the arguments passed to `emit`.

        Raises:
            InvalidArgumentError: If `listener` is not callable.
        """
        validate_listener(listener)
        self.emit(NEW_LISTENER_EVENT, event, listener)

        with self._lock:
            listeners = self._listeners_by_path.set_value(
                self.split_namespaces(event), ListenerList([listener]), merge_listener_lists
            )
            count = len(listeners)
            exceeded = 0 < self._max_listeners < count and not listeners.warned
            if exceeded:
                listeners.warned = True
            max_listeners = self._max_listeners

        logger.debug(f"Added listener {listener!r} for event {event!r}")
        if exceeded:
            logger.warning(
                f"Possible EventRegistry memory leak detected. {count} listeners added for "
                f"event {event!r}. Use registry.set_max_listeners() to increase limit."
            )
            self._hook.on_max_listeners_exceeded(
                registry=self, event=event, count=count, max_listeners=max_listeners
            )
        self._hook.after_listener_added(registry=self, event=event, listener=listener, count=count)
        return self

    on = add_listener

    def many(self, event: EventName, amount: int, listener: Listener) -> Self:
        """
        Adds a listener that is removed after it has been invoked `amount` times.

        Nothing is registered when `amount` is zero or negative.

        Args:
            event: Event name, either a delimited string or a sequence of segments.
            amount: Number of invocations before the listener is removed.
            listener: Callable invoked with the arguments passed to `emit`.

        Raises:
            InvalidArgumentError: If `listener` is not callable or `amount` is not an integer.
        """
        validate_listener(listener)
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidArgumentError(f"Amount must be an integer, got {amount!r}")
        if amount <= 0:
            return self
        return self.add_listener(event, CountingListener(self, event, amount, listener))

    def once(self, event: EventName, listener: Listener) -> Self:
        """Adds a listener that is invoked only the next time `event` is emitted."""
        return self.many(event, 1, listener)

    def on_any(self, listener: Listener) -> Self:
        """
        Adds a listener that is invoked for every emitted event.

        Raises:
            InvalidArgumentError: If `listener` is not callable.
        """
        validate_listener(listener)
        with self._lock:
            if self._any_listeners is None:
                self._any_listeners = ListenerList()
            self._any_listeners.append(listener)
            count = len(self._any_listeners)
        logger.debug(f"Added listener {listener!r} for any event")
        self._hook.after_listener_added(registry=self, event=None, listener=listener, count=count)
        return self

    # region Removal

    def remove_listener(self, event: EventName, listener: Listener) -> Self:
        """
        Removes the first listener for `event` that is, or wraps, `listener`.

        Removing a listener that is not registered is a no-op.

        Raises:
            InvalidArgumentError: If `listener` is not callable.
        """
        validate_listener(listener)
        with self._lock:
            listeners = self._listeners_by_path.get_value(self.split_namespaces(event))
            removed = _remove_first(listeners, listener)
        if removed is not None:
            logger.debug(f"Removed listener {removed!r} for event {event!r}")
            self._hook.after_listener_removed(registry=self, event=event, listener=removed)
        return self

    off = remove_listener

    def off_any(self, listener: Listener) -> Self:
        """
        Removes the first "any" listener equal to `listener`; a no-op if it is not registered.

        Raises:
            InvalidArgumentError: If `listener` is not callable.
        """
        validate_listener(listener)
        with self._lock:
            removed = _remove_first(self._any_listeners, listener, match_origin=False)
        if removed is not None:
            logger.debug(f"Removed listener {removed!r} for any event")
            self._hook.after_listener_removed(registry=self, event=None, listener=removed)
        return self

    def remove_all_listeners(self, event: EventName | None = None) -> Self:
        """
        Removes all listeners, or only those stored at the exact path of `event`.

        With an event, the path's list is replaced by an empty one; other paths (including
        descendants) are untouched. Without one, every path is discarded and the "any" list is
        dropped entirely, so `listeners_any()` returns None afterwards.
        """
        with self._lock:
            if event is not None:
                self._listeners_by_path.set_value(self.split_namespaces(event), ListenerList())
            else:
                self._listeners_by_path.clear()
                self._any_listeners = None
        logger.debug(f"Removed all listeners{'' if event is None else f' for event {event!r}'}")
        return self

    # region Emission

    def emit(self, event: EventName, *args: Any, **kwargs: Any) -> bool:
        """
        Invokes every listener for `event`, then every "any" listener, with the given arguments.

        The listeners are copied before the first one is called: listeners added or removed
        while the event is being dispatched only affect later emits. Exceptions raised by a
        listener propagate to the caller and the remaining listeners are skipped.

        Args:
            event: Event name, either a delimited string or a sequence of segments.
            *args: Positional arguments for each listener.
            **kwargs: Keyword arguments for each listener.

        Returns:
            `True` if at least one listener was invoked, `False` otherwise.
        """
        with self._lock:
            path_listeners = self._listeners_by_path.get_value(self.split_namespaces(event))
            snapshot = tuple(path_listeners or ()) + tuple(self._any_listeners or ())

        self._hook.before_emit(registry=self, event=event, listener_count=len(snapshot))

        listened = False
        if snapshot:
            token = set_current_emission(Emission(self, event, args, kwargs))
            try:
                for listener in snapshot:
                    listener(*args, **kwargs)
                    listened = True
            finally:
                reset_current_emission(token)

        self._hook.after_emit(registry=self, event=event, listened=listened)
        return listened

    # region Introspection

    def listeners(self, event: EventName) -> ListenerList | None:
        """
        Returns the live listener list stored at the exact path of `event`.

        Returns:
            The stored list (not a copy), or None if nothing was ever registered there.
        """
        with self._lock:
            return self._listeners_by_path.get_value(self.split_namespaces(event))

    def listeners_any(self) -> ListenerList | None:
        """Returns the live "any" listener list, or None if `on_any` was never called."""
        return self._any_listeners

    # region Configuration

    @property
    def delimiter(self) -> str:
        """Separator used to split event names into namespace segments."""
        return self._delimiter

    @property
    def max_listeners(self) -> int:
        """Listener count per path above which a leak warning is logged; 0 means unlimited."""
        return self._max_listeners

    def get_delimiter(self) -> str:
        """Returns the separator used to split event names."""
        return self._delimiter

    def set_delimiter(self, delimiter: str) -> Self:
        """
        Sets the separator used to split event names.

        Paths already stored are not re-indexed: listeners registered as "a.b" under the old
        delimiter stay at ("a", "b").

        Raises:
            InvalidArgumentError: If `delimiter` is not a non-empty string.
        """
        if not isinstance(delimiter, str) or not delimiter:
            raise InvalidArgumentError(f"Delimiter must be a non-empty string, got {delimiter!r}")
        with self._lock:
            self._delimiter = delimiter
        return self

    def set_max_listeners(self, max_listeners: int) -> Self:
        """
        Sets the listener count per path above which a leak warning is logged.

        Set to zero for unlimited.

        Raises:
            InvalidArgumentError: If `max_listeners` is not a non-negative integer.
        """
        valid = isinstance(max_listeners, int) and not isinstance(max_listeners, bool)
        if not valid or max_listeners < 0:
            raise InvalidArgumentError(
                f"Maximum listeners must be a non-negative integer, got {max_listeners!r}"
            )
        with self._lock:
            self._max_listeners = max_listeners
        return self

    def split_namespaces(self, event: EventName) -> tuple[str, ...]:
        """
        Splits `event` into namespace segments using the current delimiter.

        Sequences of segments are returned as a tuple without being split further.
        """
        if isinstance(event, str):
            return tuple(event.split(self._delimiter))
        return tuple(event)

    @property
    def _hook(self) -> Any:
        return self._plugin_manager.hook

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(delimiter={self._delimiter!r}, "
            f"max_listeners={self._max_listeners})"
        )


def _remove_first(
    listeners: ListenerList | None, listener: Listener, match_origin: bool = True
) -> Listener | None:
    """Removes and returns the first entry of `listeners` matching `listener`, if any."""
    if not listeners:
        return None
    for index, entry in enumerate(listeners):
        if listener_matches(entry, listener) if match_origin else entry == listener:
            del listeners[index]
            return entry
    return None
