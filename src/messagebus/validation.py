"""
Argument checks applied at the public boundary of the message bus.

Every public operation validates its arguments before touching the broker.
The helpers here produce uniform messages of the form
``Invalid <name>; expected <kind>, received <kind>`` so callers can tell at a
glance what they passed.

Example:
    >>> from messagebus.validation import ensure_string
    >>> ensure_string("queue", 42)
    Traceback (most recent call last):
    ...
    messagebus.exceptions.InvalidArgumentError: Invalid queue; expected str, received int
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from typing import Any, Final

from messagebus.exceptions import InvalidArgumentError


class _Missing:
    """Sentinel type marking an argument that was not supplied at all."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def type_of(value: Any) -> str:
    """
    Describe the kind of a value for error messages.

    Args:
        value: Any value received from a caller

    Returns:
        "missing" for the MISSING sentinel, "None" for None, "function" for
        functions, methods and partials, otherwise the type's name
    """
    if value is MISSING:
        return "missing"
    if value is None:
        return "None"
    if inspect.isroutine(value) or isinstance(value, functools.partial):
        return "function"
    return type(value).__name__


def invalid(name: str, expected: str, value: Any) -> InvalidArgumentError:
    """Build the standard validation error for an argument."""
    return InvalidArgumentError(
        name, f"Invalid {name}; expected {expected}, received {type_of(value)}"
    )


def ensure_string(name: str, value: Any) -> str:
    """Require ``value`` to be a str (empty allowed)."""
    if not isinstance(value, str):
        raise invalid(name, "str", value)
    return value


def ensure_non_empty_string(name: str, value: Any) -> str:
    """Require ``value`` to be a non-empty str."""
    if not isinstance(value, str):
        raise invalid(name, "non-empty str", value)
    if not value:
        raise InvalidArgumentError(name, f"Invalid {name}; expected non-empty str, received ''")
    return value


def ensure_mapping(name: str, value: Any) -> dict[str, Any]:
    """
    Require ``value`` to be a mapping with string keys.

    Lists, strings, numbers and callables are rejected even when they could
    be coerced, since only a key/value mapping has a meaning here.

    Args:
        name: Argument name used in the error message
        value: Value received from the caller

    Returns:
        A shallow dict copy of the mapping

    Raises:
        InvalidArgumentError: If the value is not a str-keyed mapping
    """
    if not isinstance(value, Mapping):
        raise invalid(name, "mapping", value)
    for key in value:
        if not isinstance(key, str):
            raise InvalidArgumentError(
                name, f"Invalid {name}; expected str keys, received {type_of(key)} key {key!r}"
            )
    return dict(value)


def ensure_optional_mapping(name: str, value: Any) -> dict[str, Any]:
    """Like ensure_mapping, but None and MISSING yield an empty dict."""
    if value is None or value is MISSING:
        return {}
    return ensure_mapping(name, value)


def ensure_callable(name: str, value: Any) -> Callable[..., Any]:
    """Require ``value`` to be callable."""
    if not callable(value):
        raise invalid(name, "callable", value)
    return value


__all__ = [
    "MISSING",
    "type_of",
    "invalid",
    "ensure_string",
    "ensure_non_empty_string",
    "ensure_mapping",
    "ensure_optional_mapping",
    "ensure_callable",
]
