"""
Per-message properties: validation on publish, extraction on delivery.

``MessageProperties`` normalizes the loosely-typed ``props`` mapping passed to
``publish``/``send_to_queue``. Recognized keys are validated and defaulted;
unknown keys are carried through, either as AMQP basic properties
(``correlation_id``, ``reply_to``, ...) or as message headers.

The AMQP ``timestamp`` property only has one-second resolution, so the exact
epoch-millisecond value also travels in the ``x-timestamp-ms`` header and is
preferred when reading properties back.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
)

from messagebus.exceptions import InvalidPropertyError
from messagebus.validation import ensure_optional_mapping

if TYPE_CHECKING:
    from aio_pika.abc import AbstractIncomingMessage

MIN_PRIORITY = 1
MAX_PRIORITY = 10

TIMESTAMP_HEADER = "x-timestamp-ms"

# 9999-12-31T23:59:59.999Z, the last instant a datetime can hold
MAX_TIMESTAMP = 253_402_300_799_999

# W3C trace context headers injected by the publisher
TRACE_HEADERS = frozenset({"traceparent", "tracestate", "baggage"})

# Extra keys sent as AMQP basic properties rather than headers
_PASSTHROUGH = {
    "correlation_id": "correlation_id",
    "correlationId": "correlation_id",
    "reply_to": "reply_to",
    "replyTo": "reply_to",
    "expiration": "expiration",
    "app_id": "app_id",
    "appId": "app_id",
    "user_id": "user_id",
    "userId": "user_id",
}

_FIELD_NAMES = {"messageId": "message_id"}


def now_millis() -> int:
    """Current time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


def _new_message_id() -> str:
    return str(uuid4())


class MessageProperties(BaseModel):
    """
    Validated metadata of an outgoing message.

    Instances are immutable; every publish builds a fresh one so each
    message gets its own generated id and timestamp.

    Example:
        >>> props = MessageProperties.from_mapping({"type": "order.created", "priority": 5})
        >>> props.priority
        5
        >>> len(props.message_id)
        36
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    message_id: StrictStr = Field(
        default_factory=_new_message_id,
        validation_alias=AliasChoices("message_id", "messageId"),
        description="Unique message identifier (UUID4 string by default)",
    )
    priority: StrictInt = Field(
        default=MIN_PRIORITY,
        ge=MIN_PRIORITY,
        le=MAX_PRIORITY,
        description="Message priority between 1 and 10",
    )
    timestamp: StrictInt = Field(
        default_factory=now_millis,
        ge=0,
        le=MAX_TIMESTAMP,
        description="Creation time in epoch milliseconds",
    )
    type: StrictStr | None = Field(
        default=None,
        description="Application-defined message type",
    )
    headers: dict[str, Any] | None = Field(
        default=None,
        description="Additional AMQP headers",
    )

    @classmethod
    def from_mapping(cls, props: Any = None) -> MessageProperties:
        """
        Validate a ``props`` mapping.

        A recognized key holding None is treated as absent and receives its
        default.

        Args:
            props: Mapping of property names to values, or None

        Returns:
            Validated properties with defaults filled in

        Raises:
            InvalidArgumentError: If props is not a str-keyed mapping
            InvalidPropertyError: If a recognized property has an invalid value
        """
        values = ensure_optional_mapping("props", props)
        values = {
            key: value
            for key, value in values.items()
            if not (value is None and _FIELD_NAMES.get(key, key) in cls.model_fields)
        }

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise _property_error(e) from e

    @property
    def extra(self) -> dict[str, Any]:
        """Unrecognized keys passed through from the props mapping."""
        return dict(self.model_extra or {})

    def to_message_kwargs(self) -> dict[str, Any]:
        """
        Render the properties as ``aio_pika.Message`` keyword arguments.

        Returns:
            Keyword arguments for message_id, priority, timestamp, type,
            headers and any passthrough basic properties
        """
        headers: dict[str, Any] = dict(self.headers or {})
        kwargs: dict[str, Any] = {}

        for key, value in self.extra.items():
            basic = _PASSTHROUGH.get(key)
            if basic is not None:
                kwargs[basic] = value
            else:
                headers[key] = value

        headers[TIMESTAMP_HEADER] = self.timestamp

        kwargs.update(
            message_id=self.message_id,
            priority=self.priority,
            timestamp=datetime.fromtimestamp(self.timestamp / 1000, UTC),
            type=self.type,
            headers=headers,
        )
        return kwargs


def _property_error(error: ValidationError) -> InvalidPropertyError:
    """Convert the first pydantic error into an InvalidPropertyError."""
    detail = error.errors()[0]
    loc = detail.get("loc") or ("props",)
    name = _FIELD_NAMES.get(str(loc[0]), str(loc[0]))
    received = detail.get("input")

    if name == "priority":
        message = (
            f'Invalid "priority" property; must be an integer between '
            f"{MIN_PRIORITY} and {MAX_PRIORITY}, received {received!r}"
        )
    else:
        message = f'Invalid "{name}" property; {detail["msg"].lower()}, received {received!r}'

    return InvalidPropertyError(name, message)


def _header_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, bytes | str) and value.isdigit():
        return int(value)
    return None


def properties_from_message(message: AbstractIncomingMessage) -> dict[str, Any]:
    """
    Extract the properties handed to a listener from an incoming message.

    Only properties that are actually set are included. ``timestamp`` is
    reported in epoch milliseconds. ``headers`` is present only when user
    headers remain after removing the timestamp and trace context headers.

    Args:
        message: The delivered aio-pika message

    Returns:
        Mapping of property names to values
    """
    headers: dict[str, Any] = dict(message.headers or {})
    timestamp = _header_int(headers.pop(TIMESTAMP_HEADER, None))
    for key in TRACE_HEADERS:
        headers.pop(key, None)

    if timestamp is None and message.timestamp is not None:
        timestamp = int(message.timestamp.timestamp() * 1000)

    props: dict[str, Any] = {
        "message_id": message.message_id,
        "type": message.type,
        "priority": message.priority,
        "timestamp": timestamp,
        "correlation_id": message.correlation_id,
        "reply_to": message.reply_to,
        "app_id": message.app_id,
        "user_id": message.user_id,
        "expiration": message.expiration,
        "content_type": message.content_type,
    }
    if headers:
        props["headers"] = headers

    return {key: value for key, value in props.items() if value is not None}


__all__ = [
    "MessageProperties",
    "properties_from_message",
    "now_millis",
    "MIN_PRIORITY",
    "MAX_PRIORITY",
    "MAX_TIMESTAMP",
    "TIMESTAMP_HEADER",
]
