"""
Shared test fixtures for the messagebus library.

This module provides:
- FakeBroker: in-memory stand-in for ``aio_pika.connect``
- wait_for: poll a condition from async tests
- Listener helpers recording delivered messages

Usage:
    from tests.fixtures import FakeBroker, RecordingListener, wait_for
"""

from tests.fixtures.amqp import (
    TEST_URL,
    FakeBroker,
    FakeChannel,
    FakeConnection,
    FakeIncomingMessage,
    topic_matches,
    wait_for,
)
from tests.fixtures.listeners import RecordingListener

__all__ = [
    "FakeBroker",
    "FakeChannel",
    "FakeConnection",
    "FakeIncomingMessage",
    "TEST_URL",
    "RecordingListener",
    "topic_matches",
    "wait_for",
]
