"""
Event System - Priority-Ordered Dispatch.

Provides:
- Event: Value object carrying a name, target, arguments and propagation flag
- EventDispatcher: Registry invoking listeners by descending priority
- DispatcherAware: Mixin for dispatcher injection
- Events: Names of events dispatched by eventcore itself

Usage:
    from src.eventcore.events import Event, EventDispatcher

    dispatcher = EventDispatcher()
    dispatcher.add_listener("file.created", on_file_created, priority=10)

    event = dispatcher.dispatch(Event("file.created", arguments={"path": "/foo/bar.txt"}))
"""
from .event import Event
from .dispatcher import EventDispatcher, Listener
from .aware import DispatcherAware
from .constants import Events


__all__ = ["Event", "EventDispatcher", "Listener", "DispatcherAware", "Events"]
