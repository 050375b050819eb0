"""Listener list value type and the counting wrapper used by `many` and `once`."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Callable

from emitlite.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from emitlite.registry import EventName
    from emitlite.registry import EventRegistry

Listener = Callable[..., Any]


class ListenerList(list):
    """
    Ordered listeners stored at a single event path.

    The list is mutated in place for its whole lifetime so that `warned` survives later
    registrations and removals on the same path.
    """

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)
        self.warned = False

    def __repr__(self) -> str:
        return f"ListenerList({list.__repr__(self)}, warned={self.warned})"


def merge_listener_lists(existing: ListenerList, new: ListenerList) -> ListenerList:
    """
    Appends the entries of `new` to `existing` and returns `existing`.

    Args:
        existing: List already stored in the trie.
        new: Listeners being registered.

    Returns:
        The same `existing` object, now extended.
    """
    existing.extend(new)
    return existing


class CountingListener:
    """
    Wraps a listener so it is invoked at most `amount` times.

    The wrapper removes itself from its registry when the count runs out, before calling the
    wrapped listener, so a listener that emits the same event again does not see itself.
    """

    def __init__(
        self, registry: EventRegistry, event: EventName, amount: int, origin: Listener
    ) -> None:
        self.registry = registry
        self.event = event
        # Split once so later delimiter changes cannot redirect the self-removal.
        self.path = registry.split_namespaces(event)
        self.remaining = amount
        self.origin = origin
        self._lock = threading.Lock()

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        # An older snapshot can still hold a wrapper that has already run out.
        with self._lock:
            if self.remaining <= 0:
                return None
            self.remaining -= 1
            exhausted = self.remaining == 0
        if exhausted:
            self.registry.remove_listener(self.path, self)
        return self.origin(*args, **kwargs)

    def __repr__(self) -> str:
        name = getattr(self.origin, "__qualname__", repr(self.origin))
        return f"<CountingListener {name} remaining={self.remaining}>"


def listener_matches(entry: Listener, listener: Listener) -> bool:
    """Returns `True` if `entry` is `listener` or a wrapper around it."""
    if entry == listener:
        return True
    return getattr(entry, "origin", None) == listener


def validate_listener(listener: Any) -> None:
    """
    Checks that `listener` can be invoked.

    Raises:
        InvalidArgumentError: If `listener` is not callable.
    """
    if not callable(listener):
        raise InvalidArgumentError(
            f"Listener must be callable, got {type(listener).__name__}: {listener!r}"
        )
