"""
Integration tests for the messagebus library.

These tests require a real RabbitMQ broker, provisioned with testcontainers.
They are skipped automatically if Docker or testcontainers is not available.

Run integration tests:
    pytest tests/integration/ -v

Skip integration tests:
    pytest tests/ -v -m "not integration"
"""
