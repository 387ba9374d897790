"""
Translation of topology option mappings into aio-pika keyword arguments.

Options may be written in snake_case or camelCase (``autoDelete``). Queue
options also accept shortcuts for the common ``x-`` queue arguments, e.g.
``{"max_priority": 10}`` becomes ``arguments={"x-max-priority": 10}``.
Unknown option names are rejected before any broker call.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from messagebus.exceptions import InvalidArgumentError
from messagebus.validation import ensure_mapping, invalid

EXCHANGE_FLAGS = frozenset({"durable", "auto_delete", "internal", "passive"})
QUEUE_FLAGS = frozenset({"durable", "exclusive", "auto_delete", "passive"})
QUEUE_DELETE_FLAGS = frozenset({"if_unused", "if_empty"})

# Queue option shortcuts for x-arguments
QUEUE_ARGUMENTS = {
    "message_ttl": "x-message-ttl",
    "expires": "x-expires",
    "dead_letter_exchange": "x-dead-letter-exchange",
    "dead_letter_routing_key": "x-dead-letter-routing-key",
    "max_length": "x-max-length",
    "max_priority": "x-max-priority",
}

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL.sub("_", name).lower()


def _translate(
    options: Mapping[str, Any],
    flags: frozenset[str],
    shortcuts: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    arguments: dict[str, Any] = {}
    shortcuts = shortcuts or {}

    for key, value in options.items():
        name = _snake(key)
        if name in flags:
            if not isinstance(value, bool):
                raise invalid(f"{key} option", "bool", value)
            kwargs[name] = value
        elif name == "arguments" and shortcuts:
            arguments.update(ensure_mapping("arguments option", value))
        elif name in shortcuts:
            arguments[shortcuts[name]] = value
        elif name == "arguments":
            kwargs["arguments"] = ensure_mapping("arguments option", value)
        else:
            raise InvalidArgumentError(
                "options",
                f"Invalid options; unknown option {key!r} "
                f"(expected one of {', '.join(sorted(flags | {'arguments'} | set(shortcuts)))})",
            )

    if arguments:
        kwargs["arguments"] = arguments
    return kwargs


def exchange_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Keyword arguments for ``channel.declare_exchange``."""
    return _translate(options, EXCHANGE_FLAGS)


def queue_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Keyword arguments for ``channel.declare_queue``."""
    return _translate(options, QUEUE_FLAGS, QUEUE_ARGUMENTS)


def queue_delete_options(options: Mapping[str, Any]) -> dict[str, Any]:
    """Keyword arguments for ``channel.queue_delete``."""
    return _translate(options, QUEUE_DELETE_FLAGS)


__all__ = [
    "exchange_options",
    "queue_options",
    "queue_delete_options",
    "QUEUE_ARGUMENTS",
]
