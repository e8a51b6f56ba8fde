"""
Retry policy for the text-generation client.

This module defines the immutable RetryPolicy that bounds one logical call:
how many attempts it may make, how long it waits between them, and which
HTTP statuses count as transient.

Backoff schedule (attempt n >= 2):
    delay_ms(n) = base_delay_ms * 2^(n-2) + uniform(0, jitter_max_ms)

With the defaults (1000ms base, 1000ms jitter) the waits before attempts
2..5 are roughly 1-2s, 2-3s, 4-5s and 8-9s.
"""

import random
from dataclasses import dataclass, field
from typing import Optional

from lesson_assistant.config import Settings


@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable retry budget and backoff schedule.

    Created once per client and shared by every call the client makes.

    Attributes:
        max_attempts: Total attempts allowed per call (>= 1, 1 = no retries)
        base_delay_ms: Delay before the first retry, doubled for each later one
        jitter_max_ms: Upper bound of the uniform random delay added to each wait
        retryable_status_codes: Statuses that signal a transient condition (429)
        retry_server_errors: Whether 5xx responses are retried
    """

    max_attempts: int = 5
    base_delay_ms: int = 1000
    jitter_max_ms: int = 1000
    retryable_status_codes: frozenset[int] = field(default_factory=lambda: frozenset({429}))
    retry_server_errors: bool = True

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")

        if self.jitter_max_ms < 0:
            raise ValueError("jitter_max_ms must be >= 0")

        codes = frozenset(self.retryable_status_codes)
        for code in codes:
            if not 100 <= code <= 599:
                raise ValueError(f"retryable status code out of range: {code}")
        object.__setattr__(self, "retryable_status_codes", codes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.MAX_ATTEMPTS,
            base_delay_ms=settings.BASE_DELAY_MS,
            jitter_max_ms=settings.JITTER_MAX_MS,
            retryable_status_codes=frozenset(settings.RETRYABLE_STATUS_CODES),
            retry_server_errors=settings.RETRY_SERVER_ERRORS,
        )

    def base_delay_for_attempt(self, attempt: int) -> int:
        """
        Deterministic part of the wait before ``attempt``.

        Args:
            attempt: 1-indexed attempt about to be made (must be >= 2)

        Returns:
            Delay in milliseconds without jitter
        """
        if attempt < 2:
            raise ValueError("attempt 1 is never delayed")
        return self.base_delay_ms * 2 ** (attempt - 2)

    def delay_for_attempt(self, attempt: int, rng: Optional[random.Random] = None) -> float:
        """
        Full wait before ``attempt`` in milliseconds, jitter included.

        The result always lies in
        [base_delay_for_attempt(attempt), base_delay_for_attempt(attempt) + jitter_max_ms].
        """
        jitter = (rng or random).uniform(0, self.jitter_max_ms) if self.jitter_max_ms else 0.0
        return self.base_delay_for_attempt(attempt) + jitter

    def is_retryable_status(self, status_code: int) -> bool:
        if status_code in self.retryable_status_codes:
            return True
        return self.retry_server_errors and status_code >= 500

