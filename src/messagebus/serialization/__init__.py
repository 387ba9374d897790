"""
Serialization utilities for messagebus.

Canonical JSON serialization of payloads with support for UUIDs,
datetimes and decimals.

Example:
    >>> from messagebus.serialization import json_dumps
    >>> from uuid import uuid4
    >>>
    >>> body = json_dumps({"id": uuid4()})
"""

from messagebus.serialization.json import (
    PayloadJSONEncoder,
    json_dumps,
    json_loads,
)

__all__ = [
    "PayloadJSONEncoder",
    "json_dumps",
    "json_loads",
]
