"""Hook specifications for event registry lifecycle events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from emitlite.plugins.hooks.markers import hook_spec

if TYPE_CHECKING:
    from emitlite.registry import EventName
    from emitlite.registry import EventRegistry


class RegistrySpec:
    """Hook specifications called by `EventRegistry` after it changes or dispatches."""

    @hook_spec
    def after_listener_added(
        self,
        registry: EventRegistry,
        event: EventName | None,
        listener: Callable[..., Any],
        count: int,
    ) -> None:
        """
        Called after a listener has been stored for an event path.

        Args:
            registry: Registry the listener was added to.
            event: Event name as passed by the caller, or None for an "any" listener.
            listener: The stored listener (a wrapper for `many`/`once` registrations).
            count: Number of listeners stored at the path after the registration.
        """

    @hook_spec
    def after_listener_removed(
        self,
        registry: EventRegistry,
        event: EventName | None,
        listener: Callable[..., Any],
    ) -> None:
        """
        Called after a listener has been removed.

        Args:
            registry: Registry the listener was removed from.
            event: Event name as passed by the caller, or None for an "any" listener.
            listener: The entry that was removed from the list.
        """

    @hook_spec
    def on_max_listeners_exceeded(
        self,
        registry: EventRegistry,
        event: EventName,
        count: int,
        max_listeners: int,
    ) -> None:
        """
        Called once per event path when its listener count first exceeds the maximum.

        Args:
            registry: Registry holding the listeners.
            event: Event name as passed by the caller.
            count: Number of listeners stored at the path.
            max_listeners: Configured threshold that was exceeded.
        """

    @hook_spec
    def before_emit(self, registry: EventRegistry, event: EventName, listener_count: int) -> None:
        """
        Called before listeners are invoked for an emitted event.

        Args:
            registry: Registry dispatching the event.
            event: Event name as passed to `emit`.
            listener_count: Number of listeners in the snapshot about to be invoked.
        """

    @hook_spec
    def after_emit(self, registry: EventRegistry, event: EventName, listened: bool) -> None:
        """
        Called after every listener for an emitted event has returned.

        Not called when a listener raises.

        Args:
            registry: Registry that dispatched the event.
            event: Event name as passed to `emit`.
            listened: Whether at least one listener was invoked.
        """
