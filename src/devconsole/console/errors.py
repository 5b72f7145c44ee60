"""
Exceptions raised inside the console core.

None of these escape to the host: the registry and plugin loader catch them,
log a warning and carry on without the offending command.
"""


class ConsoleError(Exception):
    """Base class for console errors."""


class CommandRegistrationError(ConsoleError):
    """Raised when a command cannot be instantiated or has no usable alias."""


class PluginLoadError(ConsoleError):
    """Raised when a plugin module or its command list cannot be loaded."""
