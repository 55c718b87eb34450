"""
Exception hierarchy for eventcore.

All library errors derive from EventError, and each one also derives from
the builtin it semantically matches, so callers can catch either.
"""


class EventError(Exception):
    """Base class for all eventcore errors."""
    pass


class ArgumentNotFoundError(EventError, KeyError):
    """Raised by Event.get_argument() when the key is absent."""

    def __init__(self, key: str, event_name: str = ""):
        self.key = key
        self.event_name = event_name
        super().__init__(key)

    def __str__(self) -> str:
        if self.event_name:
            return f"Argument '{self.key}' not found on event '{self.event_name}'"
        return f"Argument '{self.key}' not found"


class InvalidEventNameError(EventError, ValueError):
    """Raised when an event name contains characters outside [A-Za-z0-9_.]."""
    pass


class DispatcherNotSetError(EventError, RuntimeError):
    """Raised when a DispatcherAware object dispatches before injection."""
    pass


class ConfigError(EventError, ValueError):
    """Invalid configuration section, key or value."""
    pass
