"""Utility functions to manage the process-wide plugin configuration."""

import logging
from inspect import isclass
from typing import Any

from pluggy import PluginManager

from .hooks.markers import HOOK_NAMESPACE
from .hooks.specs import RegistrySpec

logger = logging.getLogger(__name__)

_PLUGIN_ENTRY_POINT = "emitlite.plugins"  # entry-point group to load installed plugins from
_PLUGIN_MANAGER: PluginManager | None = None


# region API


def register_plugins(*plugins: Any) -> None:
    """Register plugins with the global plugin manager used by every new registry."""
    plugin_manager = _get_global_plugin_manager()
    for plugin in plugins:
        if not plugin_manager.is_registered(plugin):
            _check_instance(plugin)
            plugin_manager.register(plugin)


def unregister_plugins(*plugins: Any) -> None:
    """Remove plugins from the global plugin manager; unknown plugins are ignored."""
    plugin_manager = _get_global_plugin_manager()
    for plugin in plugins:
        if plugin_manager.is_registered(plugin):
            plugin_manager.unregister(plugin)


def register_plugins_entry_points(_plugin_manager: PluginManager | None = None) -> int:
    """
    Register emitlite plugins from Python package entry points.

    Returns:
        Number of plugins loaded.
    """
    _plugin_manager = _plugin_manager if _plugin_manager else _get_global_plugin_manager()
    # Doesn't use setuptools despite the name
    count = _plugin_manager.load_setuptools_entrypoints(_PLUGIN_ENTRY_POINT)
    logger.debug(f"Loaded {count} plugin(s) from entry point group '{_PLUGIN_ENTRY_POINT}'")
    return count


def create_plugin_manager_with_plugins(plugins: list[Any]) -> PluginManager:
    """
    Create a new plugin manager with both global and registry-specific plugins.

    Plugins registered globally after this call are not seen by the returned manager.

    Args:
        plugins: Additional hook implementations to register.

    Returns:
        A new PluginManager with global + registry-specific plugins.
    """
    manager = _create_plugin_manager()

    global_manager = _get_global_plugin_manager()
    for plugin in global_manager.get_plugins():
        if not manager.is_registered(plugin):  # pragma: no branch
            manager.register(plugin)

    for plugin in plugins:
        if not manager.is_registered(plugin):  # pragma: no branch
            _check_instance(plugin)
            manager.register(plugin)

    return manager


def get_global_plugin_manager() -> PluginManager:
    """Returns the plugin manager shared by registries created without their own plugins."""
    return _get_global_plugin_manager()


# region Helpers


def _initialize_plugin_system() -> PluginManager:
    """Initializes hooks for the emitlite library."""
    manager = _create_plugin_manager()
    global _PLUGIN_MANAGER
    _PLUGIN_MANAGER = manager
    return manager


def _get_global_plugin_manager() -> PluginManager:
    """Returns initialized global plugin manager, creating it on first use."""
    plugin_manager = _PLUGIN_MANAGER
    if plugin_manager is None:
        plugin_manager = _initialize_plugin_system()
    return plugin_manager


def _create_plugin_manager() -> PluginManager:
    """Create a new PluginManager instance and register emitlite's hook specs."""
    manager = PluginManager(HOOK_NAMESPACE)
    manager.trace.root.setwriter(
        logger.debug if logger.getEffectiveLevel() == logging.DEBUG else None
    )
    manager.enable_tracing()
    manager.add_hookspecs(RegistrySpec)
    return manager


def _check_instance(plugin: Any) -> None:
    if isclass(plugin):
        raise TypeError(
            "emitlite expects plugins to be registered as instances. "
            "Have you forgotten the `()` when registering a plugin class?"
        )
