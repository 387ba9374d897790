"""
Reconnect policy for recovering from unexpected connection loss.

The default policy retries forever on a fixed one second interval. The
optional fields turn it into a bounded and/or exponential schedule without
changing that default.
"""

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class ReconnectPolicy:
    """
    Configuration for the reconnect loop.

    Attributes:
        interval: Delay in seconds before the first reconnect attempt
        max_attempts: Maximum number of attempts, or None to retry forever
        multiplier: Growth factor applied per attempt (1.0 = fixed interval)
        max_interval: Upper bound in seconds for the delay between attempts
        jitter: Fraction of the delay to add as random variation (0-1)

    Example:
        >>> policy = ReconnectPolicy()  # every second, forever
        >>> bounded = ReconnectPolicy(interval=0.5, multiplier=2.0, max_attempts=10)
    """

    interval: float = 1.0
    max_attempts: int | None = None
    multiplier: float = 1.0
    max_interval: float = 60.0
    jitter: float = 0.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.interval < 0:
            raise ValueError(f"interval must be >= 0, got {self.interval}.")

        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(
                f"max_attempts must be >= 1, got {self.max_attempts}. Use None to retry forever."
            )

        if self.multiplier < 1.0:
            raise ValueError(f"multiplier must be >= 1.0, got {self.multiplier}.")

        if self.max_interval < self.interval:
            raise ValueError(
                f"max_interval ({self.max_interval}) must be >= interval ({self.interval})."
            )

        if not 0.0 <= self.jitter <= 1.0:
            raise ValueError(f"jitter must be between 0.0 and 1.0, got {self.jitter}.")

    @property
    def unbounded(self) -> bool:
        """True when the loop retries until it succeeds."""
        return self.max_attempts is None

    def should_retry(self, attempt: int) -> bool:
        """
        Check whether another attempt is allowed.

        Args:
            attempt: Number of attempts already made (0-based)
        """
        return self.max_attempts is None or attempt < self.max_attempts

    def delay(self, attempt: int) -> float:
        """
        Calculate the delay before a reconnect attempt.

        Args:
            attempt: Current attempt number (0-based)

        Returns:
            Delay in seconds

        Example:
            >>> ReconnectPolicy().delay(5)
            1.0
            >>> ReconnectPolicy(multiplier=2.0).delay(3)
            8.0
        """
        delay = self.interval * (self.multiplier**attempt)
        delay = min(delay, self.max_interval)

        jitter_range = delay * self.jitter
        delay += random.uniform(-jitter_range, jitter_range)  # nosec B311 - not crypto

        return max(0.0, delay)


__all__ = ["ReconnectPolicy"]
