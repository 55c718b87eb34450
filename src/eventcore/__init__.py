"""
eventcore - Event/Listener Interoperability.

Provides:
- Event: Named occurrence with target, read-only arguments and a propagation flag
- EventDispatcher: Priority-ordered listener registry and dispatch loop
- DispatcherAware: Dispatcher injection for consumer objects
- listens_to: Decorator declaring listener methods
- ConfigManager: Configuration with persistence and change events

Usage:
    from src.eventcore import Event, EventDispatcher

    dispatcher = EventDispatcher()
    dispatcher.add_listener("order.placed", reserve_stock, priority=10)
    dispatcher.add_listener("order.placed", send_receipt)

    event = dispatcher.dispatch(Event("order.placed", arguments={"order_id": 42}))
"""
from .exceptions import (
    EventError,
    ArgumentNotFoundError,
    InvalidEventNameError,
    DispatcherNotSetError,
    ConfigError,
)
from .names import is_valid_event_name, validate_event_name
from .events import Event, EventDispatcher, Listener, DispatcherAware, Events
from .decorators import listens_to
from .settings import AppConfig, DispatcherSettings, LoggingSettings
from .config import ConfigManager
from .logging import setup_logging, setup_logging_from

__version__ = "0.1.0"

__all__ = [
    # Events
    "Event",
    "EventDispatcher",
    "Listener",
    "DispatcherAware",
    "Events",
    "listens_to",
    "is_valid_event_name",
    "validate_event_name",

    # Configuration
    "ConfigManager",
    "AppConfig",
    "DispatcherSettings",
    "LoggingSettings",
    "setup_logging",
    "setup_logging_from",

    # Errors
    "EventError",
    "ArgumentNotFoundError",
    "InvalidEventNameError",
    "DispatcherNotSetError",
    "ConfigError",
]
