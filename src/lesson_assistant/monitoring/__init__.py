"""Monitoring and metrics instrumentation for the Lesson Assistant.

Exports custom Prometheus metrics for the text-generation client.
"""

from lesson_assistant.monitoring.metrics import (
    attempt_latency_seconds,
    attempts_total,
    calls_total,
    retries_total,
)

__all__ = [
    "attempts_total",
    "retries_total",
    "calls_total",
    "attempt_latency_seconds",
]
