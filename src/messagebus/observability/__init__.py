"""
Observability utilities for messagebus.

Composition-based tracing over the OpenTelemetry API plus the attribute
names used on message bus spans.

Example:
    >>> from messagebus.observability import MockTracer
    >>> from messagebus import MessageBus
    >>>
    >>> tracer = MockTracer()
    >>> bus = MessageBus({"url": "amqp://localhost/"}, tracer=tracer)
"""

from messagebus.observability.attributes import (
    ATTR_CONSUMER_TAG,
    ATTR_ENCRYPTED,
    ATTR_ERROR_TYPE,
    ATTR_LISTENER_NAME,
    ATTR_MESSAGE_ID,
    ATTR_MESSAGE_TYPE,
    ATTR_MESSAGING_DESTINATION,
    ATTR_MESSAGING_OPERATION,
    ATTR_MESSAGING_SYSTEM,
    ATTR_ROUTING_KEY,
    MESSAGING_SYSTEM,
)
from messagebus.observability.tracer import (
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    SpanKindEnum,
    Tracer,
    create_tracer,
)

__all__ = [
    # Tracer
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockTracer",
    "SpanKindEnum",
    "create_tracer",
    # Attributes
    "ATTR_CONSUMER_TAG",
    "ATTR_ENCRYPTED",
    "ATTR_ERROR_TYPE",
    "ATTR_LISTENER_NAME",
    "ATTR_MESSAGE_ID",
    "ATTR_MESSAGE_TYPE",
    "ATTR_MESSAGING_DESTINATION",
    "ATTR_MESSAGING_OPERATION",
    "ATTR_MESSAGING_SYSTEM",
    "ATTR_ROUTING_KEY",
    "MESSAGING_SYSTEM",
]
