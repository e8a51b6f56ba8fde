"""
Retry policy and cancellation primitives.

The policy is model-agnostic: it only knows attempt counts, delays and which
HTTP statuses are transient. The request loop that applies it lives in
``lesson_assistant.llm.resilient_client``.

Main Components:
    - RetryPolicy: Immutable retry budget and backoff schedule
    - CancelToken: Cooperative cancellation for in-flight calls

Usage:
    >>> from lesson_assistant.retry import RetryPolicy
    >>> policy = RetryPolicy(max_attempts=3, base_delay_ms=500)
    >>> policy.base_delay_for_attempt(3)
    1000
"""

from lesson_assistant.retry.cancellation import CallAbandoned, CancelToken
from lesson_assistant.retry.policy import RetryPolicy

__all__ = [
    "CallAbandoned",
    "CancelToken",
    "RetryPolicy",
]
