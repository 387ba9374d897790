"""Unit tests for ReconnectPolicy."""

from __future__ import annotations

import pytest

from messagebus import ReconnectPolicy


class TestReconnectPolicyDefaults:
    def test_default_retries_forever_every_second(self) -> None:
        policy = ReconnectPolicy()

        assert policy.unbounded is True
        assert policy.should_retry(0)
        assert policy.should_retry(10_000)
        assert [policy.delay(n) for n in range(5)] == [1.0] * 5

    def test_is_immutable(self) -> None:
        policy = ReconnectPolicy()
        with pytest.raises(AttributeError):
            policy.interval = 5.0  # type: ignore[misc]


class TestReconnectPolicySchedule:
    def test_bounded_attempts(self) -> None:
        policy = ReconnectPolicy(max_attempts=3)

        assert policy.unbounded is False
        assert [policy.should_retry(n) for n in range(5)] == [True, True, True, False, False]

    def test_exponential_growth_is_capped(self) -> None:
        policy = ReconnectPolicy(interval=0.5, multiplier=2.0, max_interval=3.0)

        assert policy.delay(0) == 0.5
        assert policy.delay(1) == 1.0
        assert policy.delay(2) == 2.0
        assert policy.delay(3) == 3.0
        assert policy.delay(10) == 3.0

    def test_jitter_stays_within_range(self) -> None:
        policy = ReconnectPolicy(interval=1.0, jitter=0.25)

        for _ in range(50):
            assert 0.75 <= policy.delay(0) <= 1.25


class TestReconnectPolicyValidation:
    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"interval": -1}, "interval must be >= 0"),
            ({"max_attempts": 0}, "max_attempts must be >= 1"),
            ({"multiplier": 0.5}, "multiplier must be >= 1.0"),
            ({"interval": 5.0, "max_interval": 1.0}, "max_interval"),
            ({"jitter": 1.5}, "jitter must be between"),
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            ReconnectPolicy(**kwargs)
