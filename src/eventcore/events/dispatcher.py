"""
EventDispatcher - priority-ordered listener registry.

Listeners are registered per event name with an integer priority. A
dispatch calls them highest priority first, in registration order within a
priority, and stops as soon as a listener stops the event's propagation.
"""
import inspect
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from loguru import logger

from ..decorators import iter_declared_listeners
from ..names import is_valid_event_name, validate_event_name
from ..settings import DispatcherSettings
from .event import Event

Listener = Callable[[Event], Any]


def _listener_name(listener: Any) -> str:
    name = getattr(listener, "__qualname__", None) or listener.__class__.__name__
    module = getattr(listener, "__module__", None)
    return f"{module}.{name}" if module else str(name)


def _same_listener(registered: Callable, listener: Callable) -> bool:
    """Identity match; bound methods match when they wrap the same function on the same object."""
    if registered is listener:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(listener):
        return registered.__self__ is listener.__self__ and registered.__func__ is listener.__func__
    return False


class EventDispatcher:
    """
    Synchronous event dispatcher with listener priorities.

    Usage:
        dispatcher = EventDispatcher()
        dispatcher.add_listener("user.created", send_welcome_mail, priority=10)
        dispatcher.add_listener("user.created", update_stats)

        event = dispatcher.dispatch(Event("user.created", target=user))
        # or: dispatcher.dispatch("user.created")
    """

    def __init__(self, settings: Optional[DispatcherSettings] = None):
        self._settings = settings or DispatcherSettings()
        # event name -> priority -> listeners in registration order
        self._listeners: Dict[str, Dict[int, List[Listener]]] = {}
        self._sorted: Dict[str, List[Listener]] = {}
        self._lock = threading.RLock()

    @property
    def settings(self) -> DispatcherSettings:
        return self._settings

    # --- Registration ---

    def add_listener(self, event_name: str, listener: Listener, priority: int = 0) -> bool:
        """
        Register a listener for an event.

        Args:
            event_name: Event name (e.g., "file.updated")
            listener: Callable receiving the Event
            priority: Higher runs earlier (default 0)

        Returns:
            True if registered, False if rejected
        """
        if not is_valid_event_name(event_name):
            logger.warning(f"Rejected listener for invalid event name {event_name!r}")
            return False
        if not callable(listener):
            logger.warning(f"Rejected non-callable listener {listener!r} for {event_name}")
            return False
        if isinstance(priority, bool) or not isinstance(priority, (int, float)) \
                or (isinstance(priority, float) and not priority.is_integer()):
            logger.warning(f"Rejected listener for {event_name}: priority must be an integer, got {priority!r}")
            return False

        with self._lock:
            if not self._settings.allow_duplicates and self._find(event_name, listener):
                logger.warning(f"{_listener_name(listener)} already listens to {event_name}")
                return False

            by_priority = self._listeners.setdefault(event_name, {})
            by_priority.setdefault(int(priority), []).append(listener)
            self._sorted.pop(event_name, None)

        logger.debug(f"Added listener for {event_name} (priority {priority}): {_listener_name(listener)}")
        return True

    def remove_listener(self, event_name: str, listener: Listener) -> None:
        """
        Remove every registration of listener under event_name.

        Unknown names and listeners are ignored.
        """
        removed = 0
        with self._lock:
            by_priority = self._listeners.get(event_name)
            if not by_priority:
                return

            for priority in list(by_priority):
                kept = [registered for registered in by_priority[priority]
                        if not _same_listener(registered, listener)]
                removed += len(by_priority[priority]) - len(kept)
                if kept:
                    by_priority[priority] = kept
                else:
                    del by_priority[priority]

            if not by_priority:
                del self._listeners[event_name]
            if removed:
                self._sorted.pop(event_name, None)

        if removed:
            logger.debug(f"Removed listener from {event_name}: {_listener_name(listener)}")

    def remove_all_listeners(self, event_name: Optional[str] = None) -> None:
        """Remove all listeners for one event name, or for every name."""
        with self._lock:
            if event_name is None:
                self._listeners.clear()
                self._sorted.clear()
            else:
                self._listeners.pop(event_name, None)
                self._sorted.pop(event_name, None)

    def add_subscriber(self, subscriber: Any) -> int:
        """
        Register every @listens_to method of subscriber.

        Returns:
            Number of listeners registered
        """
        count = 0
        for event_name, method, priority in iter_declared_listeners(subscriber):
            if self.add_listener(event_name, method, priority):
                count += 1
        logger.debug(f"Subscribed {subscriber.__class__.__name__}: {count} listener(s)")
        return count

    def remove_subscriber(self, subscriber: Any) -> None:
        """Remove every @listens_to method of subscriber."""
        for event_name, method, _ in iter_declared_listeners(subscriber):
            self.remove_listener(event_name, method)

    # --- Introspection ---

    def get_listeners(self, event_name: Optional[str] = None) -> Union[List[Listener], Dict[str, List[Listener]]]:
        """
        Get listeners in call order.

        Args:
            event_name: Event name, or None for all names

        Returns:
            A list for one name, or a {name: list} dict for every name with listeners
        """
        with self._lock:
            if event_name is not None:
                return list(self._ordered(event_name))
            return {name: list(self._ordered(name)) for name in self._listeners}

    def has_listeners(self, event_name: Optional[str] = None) -> bool:
        with self._lock:
            if event_name is None:
                return bool(self._listeners)
            return bool(self._listeners.get(event_name))

    def get_listener_priority(self, event_name: str, listener: Listener) -> Optional[int]:
        """Priority of the first registration of listener under event_name, or None."""
        with self._lock:
            found = self._find(event_name, listener)
        return found[0] if found else None

    # --- Dispatch ---

    def dispatch(self, event_or_name: Union[Event, str], event: Optional[Event] = None) -> Event:
        """
        Call the listeners of an event, highest priority first.

        Accepts either dispatch(event) or dispatch(name, event=None). With an
        explicit name, that name selects the listeners and a default
        Event(name) is built when no event is given.

        Returns:
            The event, after every invoked listener has run

        Raises:
            InvalidEventNameError: If the name is invalid
            TypeError: If event is not an Event, or a listener is a coroutine
                function (use dispatch_async)
        """
        event_name, event = self._resolve(event_or_name, event)
        for listener in self._snapshot(event_name):
            try:
                self._trace(event_name, listener)
                returned = listener(event)
                if inspect.iscoroutine(returned):
                    returned.close()
                    raise TypeError(
                        f"Listener {_listener_name(listener)} for {event_name} is a coroutine; "
                        f"use dispatch_async()"
                    )
            except Exception as e:
                if not self._settings.suppress_listener_errors:
                    raise
                logger.exception(f"Error in listener {_listener_name(listener)} for {event_name}: {e}")
            else:
                if returned is not None:
                    event.result = returned

            if event.is_propagation_stopped():
                logger.debug(f"Propagation of {event_name} stopped by {_listener_name(listener)}")
                break
        return event

    async def dispatch_async(self, event_or_name: Union[Event, str], event: Optional[Event] = None) -> Event:
        """
        Same as dispatch(), but awaits coroutine listeners one at a time.

        Sync and async listeners may be mixed; ordering and propagation
        rules are identical to dispatch().
        """
        event_name, event = self._resolve(event_or_name, event)
        for listener in self._snapshot(event_name):
            try:
                self._trace(event_name, listener)
                returned = listener(event)
                if inspect.isawaitable(returned):
                    returned = await returned
            except Exception as e:
                if not self._settings.suppress_listener_errors:
                    raise
                logger.exception(f"Error in listener {_listener_name(listener)} for {event_name}: {e}")
            else:
                if returned is not None:
                    event.result = returned

            if event.is_propagation_stopped():
                logger.debug(f"Propagation of {event_name} stopped by {_listener_name(listener)}")
                break
        return event

    # --- Internals ---

    def _resolve(self, event_or_name: Union[Event, str], event: Optional[Event]) -> Tuple[str, Event]:
        if isinstance(event_or_name, Event):
            if event is not None:
                raise TypeError("dispatch() takes an Event or a name and an optional Event, not two events")
            return event_or_name.name, event_or_name

        event_name = validate_event_name(event_or_name)
        if event is None:
            event = Event(event_name)
        elif not isinstance(event, Event):
            raise TypeError(f"dispatch() expects an Event, got {type(event).__name__}")
        return event_name, event

    def _snapshot(self, event_name: str) -> List[Listener]:
        with self._lock:
            return list(self._ordered(event_name))

    def _ordered(self, event_name: str) -> List[Listener]:
        # Caller holds the lock.
        cached = self._sorted.get(event_name)
        if cached is None:
            by_priority = self._listeners.get(event_name, {})
            cached = [listener
                      for priority in sorted(by_priority, reverse=True)
                      for listener in by_priority[priority]]
            if by_priority:
                self._sorted[event_name] = cached
        return cached

    def _find(self, event_name: str, listener: Listener) -> Optional[Tuple[int, Listener]]:
        # Caller holds the lock.
        by_priority = self._listeners.get(event_name, {})
        for priority in sorted(by_priority, reverse=True):
            for registered in by_priority[priority]:
                if _same_listener(registered, listener):
                    return priority, registered
        return None

    def _trace(self, event_name: str, listener: Listener) -> None:
        if self._settings.trace_dispatch:
            logger.trace(f"Dispatching {event_name} to {_listener_name(listener)}")
