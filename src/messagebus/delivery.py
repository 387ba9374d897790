"""
Consumer-side delivery handling.

Each inbound message is wrapped in a :class:`Delivery`, the settle handle a
listener receives as its ``done`` argument. Calling ``done()`` acknowledges
the message, ``done(error)`` with a truthy error rejects it. A message is
settled exactly once; a listener that never settles stalls its consumer once
the prefetch window is full.

Listeners may be sync or async callables; :class:`ListenerAdapter`
normalizes both to a single async interface.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine
from enum import Enum
from typing import TYPE_CHECKING, Any

from messagebus.exceptions import MessageAlreadySettledError

if TYPE_CHECKING:
    from aio_pika.abc import AbstractIncomingMessage

logger = logging.getLogger(__name__)


# listener(payload, properties, done)
Listener = Callable[[Any, dict[str, Any], "Delivery"], Awaitable[None] | None]


class Outcome(Enum):
    """How a delivery was settled."""

    ACK = "ack"
    NACK = "nack"
    REJECT = "reject"


class Delivery:
    """
    Settle handle for one delivered message.

    Settling schedules the broker round-trip as a task on the running loop
    and returns that task, so sync listeners can fire and forget while async
    listeners can ``await done()``.

    Example:
        >>> async def listener(payload, properties, done):
        ...     try:
        ...         await handle(payload)
        ...     except Exception as e:
        ...         await done(e)  # nack
        ...     else:
        ...         await done()  # ack
    """

    def __init__(
        self,
        message: AbstractIncomingMessage,
        *,
        requeue_on_nack: bool = True,
        on_settled: Callable[[Delivery], None] | None = None,
    ) -> None:
        """
        Wrap an incoming message.

        Args:
            message: The aio-pika message to settle
            requeue_on_nack: Requeue flag used for negative acknowledgments
            on_settled: Called synchronously once the outcome is decided
        """
        self._message = message
        self._requeue_on_nack = requeue_on_nack
        self._on_settled = on_settled
        self._outcome: Outcome | None = None
        self._error: Any = None
        self._task: asyncio.Task[None] | None = None

    @property
    def message(self) -> AbstractIncomingMessage:
        return self._message

    @property
    def delivery_tag(self) -> Any:
        return self._message.delivery_tag

    @property
    def settled(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    @property
    def error(self) -> Any:
        """The value passed to ``done``/``nack`` when the message was rejected."""
        return self._error

    def __call__(self, error: Any = None) -> asyncio.Task[None]:
        """
        Settle the message: acknowledge if ``error`` is falsy, otherwise nack.

        Raises:
            MessageAlreadySettledError: If the message was already settled
        """
        if error:
            return self.nack(error)
        return self.ack()

    def ack(self) -> asyncio.Task[None]:
        """Acknowledge the message, removing it from the queue."""
        return self._settle(Outcome.ACK, None, self._message.ack)

    def nack(self, error: Any = None, *, requeue: bool | None = None) -> asyncio.Task[None]:
        """
        Negatively acknowledge the message.

        Args:
            error: Reason recorded on the delivery
            requeue: Override the bus-wide requeue setting
        """
        if requeue is None:
            requeue = self._requeue_on_nack
        return self._settle(Outcome.NACK, error, lambda: self._message.nack(requeue=requeue))

    def reject(self, error: Any = None) -> asyncio.Task[None]:
        """Reject the message without requeueing it."""
        return self._settle(Outcome.REJECT, error, lambda: self._message.reject(requeue=False))

    async def wait(self) -> None:
        """Wait for the broker round-trip of the settlement, if any."""
        if self._task is not None:
            await self._task

    def _settle(
        self,
        outcome: Outcome,
        error: Any,
        operation: Callable[[], Coroutine[Any, Any, None]],
    ) -> asyncio.Task[None]:
        if self._outcome is not None:
            raise MessageAlreadySettledError(self.delivery_tag, self._outcome.value)

        self._outcome = outcome
        self._error = error
        self._task = asyncio.get_running_loop().create_task(operation())
        self._task.add_done_callback(self._log_failure)

        if self._on_settled is not None:
            self._on_settled(self)

        return self._task

    def _log_failure(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(
                f"Failed to {self._outcome.value if self._outcome else 'settle'} "
                f"message {self._message.message_id}: {exc}",
                extra={
                    "message_id": self._message.message_id,
                    "delivery_tag": self.delivery_tag,
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )

    def __repr__(self) -> str:
        state = self._outcome.value if self._outcome else "pending"
        return f"Delivery(tag={self.delivery_tag!r}, {state})"


def get_listener_name(listener: Any) -> str:
    """
    Get a descriptive name for a listener for logging and debugging.

    Args:
        listener: Any callable (function, bound method, lambda, callable object)

    Returns:
        String name for the listener
    """
    if hasattr(listener, "__qualname__"):
        return str(listener.__qualname__)
    if hasattr(listener, "__name__"):
        return str(listener.__name__)
    if hasattr(listener, "func"):
        return get_listener_name(listener.func)
    return type(listener).__name__


class ListenerAdapter:
    """
    Adapter that normalizes sync and async listeners to one async interface.

    Attributes:
        original: The original unwrapped listener
        name: Descriptive name for logging
    """

    def __init__(self, listener: Callable[..., Any]) -> None:
        """
        Initialize the adapter.

        Args:
            listener: Callable taking ``(payload, properties, done)``

        Raises:
            TypeError: If the listener is not callable
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener)}")
        self._original = listener
        self._name = get_listener_name(listener)

    @property
    def original(self) -> Callable[..., Any]:
        """Get the original unwrapped listener."""
        return self._original

    @property
    def name(self) -> str:
        """Get the listener's descriptive name."""
        return self._name

    async def __call__(self, payload: Any, properties: dict[str, Any], done: Delivery) -> None:
        result = self._original(payload, properties, done)
        if inspect.isawaitable(result):
            await result

    def __repr__(self) -> str:
        return f"ListenerAdapter({self._name})"


__all__ = [
    "Delivery",
    "Listener",
    "ListenerAdapter",
    "Outcome",
    "get_listener_name",
]
