"""
messagebus - Connection lifecycle and delivery contract layer for AMQP brokers.

This library provides:
- A MessageBus with connect/disconnect and automatic reconnection
- Subscriptions with manual acknowledgment through a ``done`` handle
- Publisher-confirmed publish and send-to-queue with property validation
- Optional AES-GCM payload encryption
- Thin topology helpers (exchanges, queues, bindings)
- Optional OpenTelemetry tracing
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("amqp-message-bus")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from messagebus.bus import (
    MessageBus,
    MessageBusStats,
    PublishConfirmation,
    QueueInfo,
    Subscription,
)
from messagebus.codec import EnvelopeCodec
from messagebus.config import MessageBusConfig
from messagebus.connection import ConnectionManager, ConnectionState
from messagebus.delivery import Delivery, ListenerAdapter, Outcome
from messagebus.exceptions import (
    CodecError,
    InvalidArgumentError,
    InvalidPropertyError,
    MessageAlreadySettledError,
    MessageBusError,
    NotConnectedError,
    PublishError,
    SubscriptionActiveError,
    UnknownConsumerError,
)
from messagebus.properties import MessageProperties
from messagebus.registry import ConsumerRegistration, ConsumerRegistry
from messagebus.retry import ReconnectPolicy
from messagebus.validation import MISSING

__all__ = [
    "__version__",
    # Bus
    "MessageBus",
    "MessageBusConfig",
    "MessageBusStats",
    "PublishConfirmation",
    "QueueInfo",
    "Subscription",
    "ReconnectPolicy",
    # Components
    "ConnectionManager",
    "ConnectionState",
    "ConsumerRegistration",
    "ConsumerRegistry",
    "Delivery",
    "EnvelopeCodec",
    "ListenerAdapter",
    "MessageProperties",
    "Outcome",
    "MISSING",
    # Exceptions
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
