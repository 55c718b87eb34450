"""Event name rules shared by events, the dispatcher and decorators."""
import re
from typing import Any

from .exceptions import InvalidEventNameError

EVENT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_.]+")


def is_valid_event_name(name: Any) -> bool:
    """Check that name is a non-empty string of [A-Za-z0-9_.] characters."""
    return isinstance(name, str) and EVENT_NAME_PATTERN.fullmatch(name) is not None


def validate_event_name(name: Any) -> str:
    """
    Return name unchanged if valid.

    Raises:
        InvalidEventNameError: If name is empty or contains other characters
    """
    if not is_valid_event_name(name):
        raise InvalidEventNameError(
            f"Invalid event name {name!r}: only letters, digits, '_' and '.' are allowed"
        )
    return name
