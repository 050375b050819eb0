"""Emission context for listeners running inside `EventRegistry.emit`."""

from __future__ import annotations

from contextvars import ContextVar
from contextvars import Token
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from emitlite.registry import EventRegistry
    from emitlite.registry import EventName


@dataclass(frozen=True)
class Emission:
    """Describes the event currently being dispatched to listeners."""

    registry: EventRegistry
    """Registry that is dispatching the event."""

    event: EventName
    """Event name exactly as it was passed to `emit`."""

    args: tuple[Any, ...] = ()
    """Positional arguments forwarded to each listener."""

    kwargs: dict[str, Any] = field(default_factory=dict)
    """Keyword arguments forwarded to each listener."""


_current_emission: ContextVar[Emission | None] = ContextVar("current_emission", default=None)


def set_current_emission(emission: Emission) -> Token[Emission | None]:
    """
    Mark `emission` as the one being dispatched in the current context.

    Args:
        emission: The emission about to be dispatched.

    Returns:
        Token to pass to `reset_current_emission` once dispatch is finished.
    """
    return _current_emission.set(emission)


def get_current_emission() -> Emission | None:
    """
    Get the emission being dispatched in the current context.

    Returns:
        The innermost active `Emission`, or None when called outside a listener.
    """
    return _current_emission.get()


def reset_current_emission(token: Token[Emission | None]) -> None:
    """
    Restore the emission context that was active before `set_current_emission`.

    Nested emits rely on this to hand the outer emission back to its remaining listeners.
    """
    _current_emission.reset(token)
