"""
Shared pytest fixtures for the messagebus library tests.

This module provides:
- broker: FakeBroker patched in place of ``aio_pika.connect``
- bus_config: configuration with a fast reconnect policy
- bus / connected_bus: MessageBus instances recording spans with MockTracer
- encrypted_bus: connected bus with an encryption key

All bus fixtures disconnect on teardown.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator
from unittest.mock import patch

import pytest
import pytest_asyncio

from messagebus import MessageBus, MessageBusConfig, ReconnectPolicy
from messagebus.observability import MockTracer
from tests.fixtures import TEST_URL, FakeBroker


@pytest.fixture
def broker() -> Generator[FakeBroker, None, None]:
    """In-memory broker reachable through aio_pika.connect."""
    fake = FakeBroker()
    with patch("messagebus.connection.aio_pika.connect", new=fake.connect):
        yield fake


@pytest.fixture
def tracer() -> MockTracer:
    return MockTracer()


@pytest.fixture
def bus_config() -> MessageBusConfig:
    """Configuration reconnecting every 10ms so loss tests stay fast."""
    return MessageBusConfig(
        url=TEST_URL,
        reconnect_policy=ReconnectPolicy(interval=0.01, max_interval=0.05),
    )


@pytest_asyncio.fixture
async def bus(
    broker: FakeBroker,
    bus_config: MessageBusConfig,
    tracer: MockTracer,
) -> AsyncGenerator[MessageBus, None]:
    """Bus that is not yet connected."""
    instance = MessageBus(bus_config, tracer=tracer)
    yield instance
    await instance.disconnect()


@pytest_asyncio.fixture
async def connected_bus(bus: MessageBus) -> MessageBus:
    await bus.connect()
    return bus


@pytest_asyncio.fixture
async def encrypted_bus(
    broker: FakeBroker,
    tracer: MockTracer,
) -> AsyncGenerator[MessageBus, None]:
    instance = MessageBus(
        MessageBusConfig(
            url=TEST_URL,
            encryption_key="s3cret",
            reconnect_policy=ReconnectPolicy(interval=0.01, max_interval=0.05),
        ),
        tracer=tracer,
    )
    await instance.connect()
    yield instance
    await instance.disconnect()
