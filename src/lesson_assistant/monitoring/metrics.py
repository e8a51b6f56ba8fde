"""Custom Prometheus metrics for the Lesson Assistant.

Exposure is left to the host process (e.g. ``prometheus_client.start_http_server``).
Alert rules should be configured for:
- assistant_calls_total{result="exhausted_retries"} (service degraded or over quota)
- assistant_retries_total{reason="rate_limited"} (quota pressure)
- assistant_attempt_latency_seconds (slow generations)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

attempts_total = Counter(
    "assistant_attempts_total",
    "Total generateContent attempts by outcome",
    ["model", "outcome"],
)
"""
Attempts counter by model and outcome.

Labels:
- model: Target model identifier
- outcome: success, empty_result, transport_error, rate_limited, terminal_status
"""

retries_total = Counter(
    "assistant_retries_total",
    "Total backoff waits scheduled, by the failure that caused them",
    ["reason"],
)
"""
Retries counter by reason.

Labels:
- reason: transport_error, rate_limited

Alert thresholds:
- WARN: retry rate > 10% of attempts
- CRITICAL: retry rate > 30% of attempts
"""

# === Call Metrics ===

calls_total = Counter(
    "assistant_calls_total",
    "Total logical calls by final result",
    ["result"],
)
"""
Logical calls counter.

Labels:
- result: success, empty_result, terminal_status, exhausted_retries, cancelled
"""

attempt_latency_seconds = Histogram(
    "assistant_attempt_latency_seconds",
    "Latency of a single generateContent attempt in seconds",
    ["model"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
"""
Per-attempt latency histogram (network round-trip only, backoff excluded).

Alert thresholds:
- WARN: p95 > 10s
- CRITICAL: p95 > 30s
"""
