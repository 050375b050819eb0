"""
Centralized exception classes for the emitlite library.

All emitlite-specific exceptions inherit from EmitliteError for easy catching.
"""


class EmitliteError(Exception):
    """Base exception for all emitlite errors."""


class InvalidArgumentError(EmitliteError, TypeError):
    """Raised when a listener is not callable or a configuration value is invalid."""
