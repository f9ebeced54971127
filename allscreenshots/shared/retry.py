"""Retry policy with exponential backoff and jitter."""

from __future__ import annotations

import random
from dataclasses import dataclass

from allscreenshots.shared.exceptions import AllscreenshotsConfigError

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY = 0.5
DEFAULT_MAX_DELAY = 30.0
DEFAULT_MULTIPLIER = 2.0
DEFAULT_JITTER = 0.1


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff configuration shared by every call a client makes.

    Attributes:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        initial_delay: Delay before the first retry, in seconds
        max_delay: Upper bound for the un-jittered delay, in seconds
        multiplier: Growth factor between consecutive retries
        jitter: Fraction of the delay used as a symmetric random perturbation (0.0 to 1.0)
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_delay: float = DEFAULT_INITIAL_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    multiplier: float = DEFAULT_MULTIPLIER
    jitter: float = DEFAULT_JITTER

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise AllscreenshotsConfigError("max_retries must be zero or greater")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise AllscreenshotsConfigError("Retry delays must be zero or greater")
        if self.multiplier < 1:
            raise AllscreenshotsConfigError("Backoff multiplier must be at least 1")
        if not 0.0 <= self.jitter <= 1.0:
            raise AllscreenshotsConfigError("Jitter must be between 0.0 and 1.0")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for_attempt(self, attempt: int) -> float:
        """Return the number of seconds to wait before ``attempt``.

        Attempt 0 is the initial request and never waits. For later attempts the
        delay grows as ``initial_delay * multiplier ** (attempt - 1)`` up to
        ``max_delay``, then jitter is applied and the result is floored at zero.
        """
        if attempt <= 0:
            return 0.0

        try:
            base = min(self.initial_delay * self.multiplier ** (attempt - 1), self.max_delay)
        except OverflowError:
            base = self.max_delay
        if self.jitter == 0:
            return base

        spread = base * self.jitter
        return max(0.0, base + random.uniform(-spread, spread))  # noqa: S311
