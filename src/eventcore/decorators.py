"""
Decorator Utilities for eventcore.

Provides syntactic sugar for declaring listeners on classes.
"""
import inspect
from typing import Any, Callable, Iterator, List, Tuple

from .names import validate_event_name

LISTENS_TO_ATTR = "_listens_to"


def listens_to(*event_names: str, priority: int = 0):
    """
    Decorator to mark a method as a listener for one or more events.

    Args:
        *event_names: Event names to listen to
        priority: Higher runs earlier (default 0)

    Usage:
        class AuditLog:
            @listens_to("user.created", "user.deleted", priority=10)
            def on_user_event(self, event):
                pass

        dispatcher.add_subscriber(AuditLog())

    Decorators can be stacked to use different priorities per event.
    """
    if not event_names:
        raise TypeError("listens_to() needs at least one event name")
    for name in event_names:
        validate_event_name(name)

    def decorator(func):
        declared: List[Tuple[str, int]] = list(getattr(func, LISTENS_TO_ATTR, []))
        declared.extend((name, priority) for name in event_names)
        setattr(func, LISTENS_TO_ATTR, declared)
        return func
    return decorator


def iter_declared_listeners(obj: Any) -> Iterator[Tuple[str, Callable, int]]:
    """
    Yield (event_name, bound_method, priority) for every @listens_to method on obj.

    Methods are visited in name order, so registration order is stable.
    """
    for _, method in inspect.getmembers(obj, predicate=inspect.ismethod):
        for event_name, priority in getattr(method, LISTENS_TO_ATTR, ()):
            yield event_name, method, priority
