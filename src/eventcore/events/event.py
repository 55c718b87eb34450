"""
Event - value object passed through the dispatcher.

An event names an occurrence, optionally points at the object it concerns
and carries read-only keyed arguments. The only state listeners may change
is the propagation flag and the result slot.
"""
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..exceptions import ArgumentNotFoundError
from ..names import validate_event_name


class Event:
    """
    Event passed to every listener during a dispatch.

    Usage:
        event = Event("file.saved", target=document, arguments={"path": "/a.txt"})
        dispatcher.dispatch(event)

        if event.is_propagation_stopped():
            ...
    """

    def __init__(
        self,
        name: str,
        target: Any = None,
        arguments: Optional[Mapping[str, Any]] = None,
    ):
        self._name = validate_event_name(name)
        self._target = target
        self._arguments = MappingProxyType(dict(arguments or {}))
        self._propagation_stopped = False
        self.result: Any = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def target(self) -> Any:
        return self._target

    @property
    def arguments(self) -> Mapping[str, Any]:
        """Read-only view of the event arguments."""
        return self._arguments

    def get_name(self) -> str:
        return self._name

    def get_target(self) -> Any:
        return self._target

    def get_arguments(self) -> Mapping[str, Any]:
        return self._arguments

    def has_argument(self, key: str) -> bool:
        return key in self._arguments

    def get_argument(self, key: str) -> Any:
        """
        Get a single argument.

        Args:
            key: Argument name

        Returns:
            The stored value, as given at construction

        Raises:
            ArgumentNotFoundError: If the event has no such argument
        """
        try:
            return self._arguments[key]
        except KeyError:
            raise ArgumentNotFoundError(key, self._name) from None

    def stop_propagation(self) -> None:
        """Prevent listeners after the current one from being called. Irreversible."""
        self._propagation_stopped = True

    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped

    def __repr__(self) -> str:
        state = "stopped" if self._propagation_stopped else "propagating"
        return f"<Event {self._name!r} args={dict(self._arguments)!r} {state}>"
