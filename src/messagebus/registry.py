"""
Registry of active consumer subscriptions.

The registry is owned by a single MessageBus and scoped to one connection
epoch: it is emptied on disconnect and when the connection is lost.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aio_pika.abc import AbstractQueue

    from messagebus.delivery import ListenerAdapter


@dataclass(frozen=True)
class ConsumerRegistration:
    """
    An active broker consumer.

    Attributes:
        consumer_tag: Unique identifier of the subscription (UUID4 string)
        queue_name: Name of the consumed queue
        queue: aio-pika queue handle used to cancel the consumer
        listener: Normalized listener receiving decoded messages
        created_at: When the broker accepted the consume request
    """

    consumer_tag: str
    queue_name: str
    queue: AbstractQueue
    listener: ListenerAdapter
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class ConsumerRegistry:
    """
    Maps consumer tags to their registrations.

    Example:
        >>> registry = ConsumerRegistry()
        >>> registry.add(registration)
        >>> registry.tags_for_queue("orders")
        ['6f1c...']
    """

    def __init__(self) -> None:
        self._registrations: dict[str, ConsumerRegistration] = {}

    def add(self, registration: ConsumerRegistration) -> None:
        """
        Record a registration.

        Raises:
            ValueError: If the consumer tag is already registered
        """
        if registration.consumer_tag in self._registrations:
            raise ValueError(f"Consumer tag {registration.consumer_tag} is already registered")
        self._registrations[registration.consumer_tag] = registration

    def get(self, consumer_tag: str) -> ConsumerRegistration | None:
        return self._registrations.get(consumer_tag)

    def remove(self, consumer_tag: str) -> ConsumerRegistration | None:
        """Remove and return a registration, or None if it was not present."""
        return self._registrations.pop(consumer_tag, None)

    def tags(self) -> list[str]:
        """Snapshot of all registered consumer tags."""
        return list(self._registrations)

    def tags_for_queue(self, queue_name: str) -> list[str]:
        """Snapshot of the consumer tags consuming ``queue_name``."""
        return [
            tag
            for tag, registration in self._registrations.items()
            if registration.queue_name == queue_name
        ]

    def first(self) -> ConsumerRegistration | None:
        """The oldest registration still active, if any."""
        return next(iter(self._registrations.values()), None)

    def clear(self) -> list[ConsumerRegistration]:
        """Drop every registration and return what was dropped."""
        dropped = list(self._registrations.values())
        self._registrations.clear()
        return dropped

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, consumer_tag: object) -> bool:
        return consumer_tag in self._registrations

    def __iter__(self) -> Iterator[ConsumerRegistration]:
        return iter(list(self._registrations.values()))


__all__ = ["ConsumerRegistration", "ConsumerRegistry"]
