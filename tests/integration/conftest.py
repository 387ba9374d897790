"""
Shared pytest fixtures for integration tests.

This module provides a RabbitMQ broker using testcontainers for automatic
container management.

If testcontainers or Docker is not available, tests are automatically skipped.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest

from tests.fixtures.containers import DOCKER_AVAILABLE, TESTCONTAINERS_AVAILABLE

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for integration tests."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (may require docker)"
    )
    config.addinivalue_line("markers", "rabbitmq: marks tests that require RabbitMQ")


# ============================================================================
# RabbitMQ Container Fixture
# ============================================================================


@pytest.fixture(scope="session")
def rabbitmq_container() -> Generator[Any, None, None]:
    """
    Provide RabbitMQ container for integration tests.

    Uses testcontainers to automatically start and stop a RabbitMQ container.
    Container is shared across all tests in the session for efficiency.
    """
    if not TESTCONTAINERS_AVAILABLE or not DOCKER_AVAILABLE:
        pytest.skip("RabbitMQ testcontainer not available")

    from testcontainers.core.container import DockerContainer
    from testcontainers.core.waiting_utils import wait_for_logs

    container = DockerContainer("rabbitmq:3-management")
    container.with_exposed_ports(5672, 15672)
    container.with_env("RABBITMQ_DEFAULT_USER", "guest")
    container.with_env("RABBITMQ_DEFAULT_PASS", "guest")
    container.start()

    # Wait for RabbitMQ to be ready
    wait_for_logs(container, "started TCP listener on", timeout=60)

    yield container

    container.stop()


@pytest.fixture(scope="session")
def rabbitmq_url(rabbitmq_container: Any) -> str:
    """Get RabbitMQ connection URL from container."""
    host = rabbitmq_container.get_container_host_ip()
    port = rabbitmq_container.get_exposed_port(5672)
    return f"amqp://guest:guest@{host}:{port}/"
