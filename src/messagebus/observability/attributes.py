"""
Standard span attributes for messagebus.

These follow the OpenTelemetry messaging semantic conventions where
applicable.
"""

# =============================================================================
# Messaging Attributes (OpenTelemetry semantic conventions)
# =============================================================================

ATTR_MESSAGING_SYSTEM = "messaging.system"
"""Messaging system identifier (always 'rabbitmq')."""

ATTR_MESSAGING_DESTINATION = "messaging.destination.name"
"""Exchange or queue the message is sent to or consumed from (string)."""

ATTR_MESSAGING_OPERATION = "messaging.operation"
"""Kind of messaging operation: 'publish', 'process' or 'settle'."""

ATTR_MESSAGE_ID = "messaging.message.id"
"""Message identifier (string)."""

ATTR_ROUTING_KEY = "messaging.rabbitmq.destination.routing_key"
"""Routing key used for the publish or binding (string)."""

# =============================================================================
# Message Bus Attributes
# =============================================================================

ATTR_MESSAGE_TYPE = "messagebus.message.type"
"""Application-defined message type property (string)."""

ATTR_CONSUMER_TAG = "messagebus.consumer.tag"
"""Consumer tag of the subscription receiving the message (string)."""

ATTR_LISTENER_NAME = "messagebus.listener.name"
"""Name of the listener handling a delivery (string)."""

ATTR_ENCRYPTED = "messagebus.encrypted"
"""Whether the payload is encrypted (boolean)."""

# =============================================================================
# Error Attributes
# =============================================================================

ATTR_ERROR_TYPE = "error.type"
"""Exception class name when an operation fails (string)."""

MESSAGING_SYSTEM = "rabbitmq"

__all__ = [
    "ATTR_MESSAGING_SYSTEM",
    "ATTR_MESSAGING_DESTINATION",
    "ATTR_MESSAGING_OPERATION",
    "ATTR_MESSAGE_ID",
    "ATTR_ROUTING_KEY",
    "ATTR_MESSAGE_TYPE",
    "ATTR_CONSUMER_TAG",
    "ATTR_LISTENER_NAME",
    "ATTR_ENCRYPTED",
    "ATTR_ERROR_TYPE",
    "MESSAGING_SYSTEM",
]
