from emitlite.plugins.hooks.markers import hook_impl
from emitlite.plugins.hooks.markers import hook_spec

__all__ = ["hook_impl", "hook_spec"]
