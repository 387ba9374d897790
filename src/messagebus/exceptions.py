"""Library exceptions for the messagebus package."""

from typing import Any


class MessageBusError(Exception):
    """Base exception for messagebus library."""

    pass


class InvalidArgumentError(MessageBusError, TypeError):
    """
    Raised when an argument passed to a public operation is malformed.

    Validation errors are always raised before any broker interaction and
    are never retried. The error also derives from TypeError so callers that
    only care about "wrong kind of value" can catch the builtin.

    Attributes:
        argument: Name of the offending argument (e.g., "queue", "props")
    """

    def __init__(self, argument: str, message: str) -> None:
        self.argument = argument
        super().__init__(message)


class InvalidPropertyError(InvalidArgumentError):
    """Raised when a recognized message property fails validation."""

    def __init__(self, property_name: str, message: str) -> None:
        self.property_name = property_name
        super().__init__("props", message)


class NotConnectedError(MessageBusError):
    """Raised when an operation requires an open connection but there is none."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__(f"Cannot {action}; did you forget to call connect()?")


class UnknownConsumerError(MessageBusError):
    """Raised when unsubscribing a consumer tag that is not registered."""

    def __init__(self, consumer_tag: str) -> None:
        self.consumer_tag = consumer_tag
        super().__init__(f"Unknown consumer tag {consumer_tag}")


class SubscriptionActiveError(MessageBusError):
    """
    Raised in single-subscription mode when a subscription already exists.

    Attributes:
        consumer_tag: Tag of the subscription that is still active
        queue: Queue the active subscription consumes
    """

    def __init__(self, consumer_tag: str, queue: str) -> None:
        self.consumer_tag = consumer_tag
        self.queue = queue
        super().__init__(
            f"Subscription already active on queue {queue!r} "
            f"(consumer tag {consumer_tag}); unsubscribe first"
        )


class MessageAlreadySettledError(MessageBusError):
    """Raised when a delivery is acknowledged or rejected more than once."""

    def __init__(self, delivery_tag: Any, outcome: str) -> None:
        self.delivery_tag = delivery_tag
        self.outcome = outcome
        super().__init__(f"Message {delivery_tag} has already been settled ({outcome})")


class CodecError(MessageBusError):
    """Raised when a payload cannot be encoded or decoded."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation} payload: {message}")


class PublishError(MessageBusError):
    """
    Raised when the broker refuses to confirm a published message.

    Attributes:
        exchange: Exchange the message was published to ("" for the default exchange)
        routing_key: Routing key used for the publish
        message_id: Identifier of the rejected message
    """

    def __init__(self, exchange: str, routing_key: str, message_id: str, reason: str) -> None:
        self.exchange = exchange
        self.routing_key = routing_key
        self.message_id = message_id
        target = exchange or "(default exchange)"
        super().__init__(
            f"Broker did not confirm message {message_id} "
            f"published to {target} with routing key {routing_key!r}: {reason}"
        )


__all__ = [
    "MessageBusError",
    "InvalidArgumentError",
    "InvalidPropertyError",
    "NotConnectedError",
    "UnknownConsumerError",
    "SubscriptionActiveError",
    "MessageAlreadySettledError",
    "CodecError",
    "PublishError",
]
