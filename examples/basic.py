"""Example demonstrating namespaced listeners, one-shot listeners, and the logging plugin."""
from __future__ import annotations

import logging

from emitlite import EventRegistry, get_current_emission
from emitlite.plugins import LoggingPlugin, get_logger

logger = get_logger(__name__)


def on_created(name: str) -> None:
    logger.info(f"user {name} created")


def on_deleted(name: str) -> None:
    logger.info(f"user {name} deleted")


def audit(*args: object) -> None:
    emission = get_current_emission()
    logger.info(f"audit: {emission.event} {args}" if emission else "audit outside emit")


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s [%(emitlite_event)s] %(message)s",
    )
    registry = EventRegistry(plugins=[LoggingPlugin(level=logging.DEBUG)])
    registry.on("user.created", on_created).once("user.deleted", on_deleted).on_any(audit)

    registry.emit("user.created", "alice")
    registry.emit("user.deleted", "alice")
    registry.emit("user.deleted", "bob")  # once listener already removed; audit still fires
    print(f"listeners for user.deleted: {registry.listeners('user.deleted')}")


if __name__ == "__main__":
    main()
