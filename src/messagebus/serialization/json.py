"""
JSON serialization of message payloads.

Payloads are rendered canonically: keys sorted, compact separators, UTF-8
text and no NaN/Infinity. The same payload therefore always produces the same
bytes, which keeps encrypted and plaintext envelopes comparable.

Example:
    >>> from messagebus.serialization import json_dumps, json_loads
    >>>
    >>> json_dumps({"b": 1, "a": [1, 2]})
    b'{"a":[1,2],"b":1}'
    >>> json_loads(b'{"a":1}')
    {'a': 1}
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID


class PayloadJSONEncoder(json.JSONEncoder):
    """
    JSON encoder that handles the common non-JSON types found in payloads.

    - UUID objects: Converted to string representation
    - datetime/date objects: Converted to ISO 8601 format string
    - Decimal objects: Converted to string to avoid precision loss

    These conversions are one-way: decoding yields strings, not the original
    types.
    """

    def default(self, obj: Any) -> Any:
        """
        Convert non-serializable objects to JSON-serializable formats.

        Args:
            obj: Object to serialize

        Returns:
            JSON-serializable representation

        Raises:
            TypeError: If object type is not supported
        """
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, datetime | date):
            return obj.isoformat()
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def json_dumps(obj: Any) -> bytes:
    """
    Serialize a payload to canonical UTF-8 JSON bytes.

    Args:
        obj: Object to serialize

    Returns:
        UTF-8 encoded JSON

    Raises:
        TypeError: If the object contains unsupported types
        ValueError: If the object contains NaN or Infinity, or a circular reference
    """
    return json.dumps(
        obj,
        cls=PayloadJSONEncoder,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def json_loads(data: bytes | str) -> Any:
    """
    Deserialize JSON bytes or text to a Python object.

    Args:
        data: UTF-8 encoded JSON, or already-decoded text

    Returns:
        Python object representation

    Raises:
        UnicodeDecodeError: If bytes are not valid UTF-8
        json.JSONDecodeError: If the text is not valid JSON
    """
    if isinstance(data, bytes | bytearray | memoryview):
        data = bytes(data).decode("utf-8")
    return json.loads(data)


__all__ = [
    "PayloadJSONEncoder",
    "json_dumps",
    "json_loads",
]
