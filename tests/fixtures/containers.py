"""Detection of Docker and testcontainers for integration tests."""

from __future__ import annotations

import importlib.util
import subprocess

TESTCONTAINERS_AVAILABLE = importlib.util.find_spec("testcontainers") is not None


def is_docker_available() -> bool:
    """Check if Docker is available for running containers."""
    try:
        result = subprocess.run(
            ["docker", "info"],
            capture_output=True,
            timeout=5,
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, OSError):
        return False


DOCKER_AVAILABLE = is_docker_available()
