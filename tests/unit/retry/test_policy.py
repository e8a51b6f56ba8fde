"""
Unit tests for RetryPolicy.

Tests validation, the backoff schedule bounds and status classification.
"""

import random
from unittest.mock import MagicMock

import pytest

from lesson_assistant.config import Settings
from lesson_assistant.retry.policy import RetryPolicy


# ============================================================================
# Construction
# ============================================================================


def test_default_policy_matches_service_defaults():
    policy = RetryPolicy()

    assert policy.max_attempts == 5
    assert policy.base_delay_ms == 1000
    assert policy.jitter_max_ms == 1000
    assert policy.retryable_status_codes == frozenset({429})
    assert policy.retry_server_errors is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_attempts": 0},
        {"max_attempts": -1},
        {"base_delay_ms": -1},
        {"jitter_max_ms": -5},
        {"retryable_status_codes": {42}},
        {"retryable_status_codes": {700}},
    ],
)
def test_invalid_policy_rejected(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)


def test_policy_is_immutable():
    policy = RetryPolicy()

    with pytest.raises(AttributeError):
        policy.max_attempts = 10


def test_status_codes_coerced_to_frozenset():
    policy = RetryPolicy(retryable_status_codes=[429, 503])

    assert isinstance(policy.retryable_status_codes, frozenset)
    assert policy.retryable_status_codes == {429, 503}


def test_from_settings():
    settings = MagicMock(spec=Settings)
    settings.MAX_ATTEMPTS = 2
    settings.BASE_DELAY_MS = 250
    settings.JITTER_MAX_MS = 0
    settings.RETRYABLE_STATUS_CODES = [429, 408]
    settings.RETRY_SERVER_ERRORS = False

    policy = RetryPolicy.from_settings(settings)

    assert policy == RetryPolicy(
        max_attempts=2,
        base_delay_ms=250,
        jitter_max_ms=0,
        retryable_status_codes=frozenset({429, 408}),
        retry_server_errors=False,
    )


# ============================================================================
# Backoff schedule
# ============================================================================


def test_base_delay_doubles_per_attempt():
    policy = RetryPolicy(base_delay_ms=1000)

    assert [policy.base_delay_for_attempt(n) for n in range(2, 6)] == [1000, 2000, 4000, 8000]


def test_first_attempt_has_no_delay():
    with pytest.raises(ValueError):
        RetryPolicy().base_delay_for_attempt(1)


def test_zero_jitter_is_deterministic():
    policy = RetryPolicy(base_delay_ms=300, jitter_max_ms=0)

    assert policy.delay_for_attempt(2) == 300
    assert policy.delay_for_attempt(4) == 1200


@pytest.mark.parametrize("seed", [0, 1, 42, 2024])
def test_delay_within_jitter_bounds(seed):
    """Delay before attempt n lies in [base*2^(n-2), base*2^(n-2) + jitter]."""
    rng = random.Random(seed)
    policy = RetryPolicy(max_attempts=8, base_delay_ms=100, jitter_max_ms=250)

    for attempt in range(2, policy.max_attempts + 1):
        for _ in range(50):
            delay = policy.delay_for_attempt(attempt, rng)
            lower = 100 * 2 ** (attempt - 2)
            assert lower <= delay <= lower + 250


def test_jitter_uses_given_rng():
    rng = MagicMock()
    rng.uniform.return_value = 17.5
    policy = RetryPolicy(base_delay_ms=100, jitter_max_ms=50)

    assert policy.delay_for_attempt(3, rng) == 217.5
    rng.uniform.assert_called_once_with(0, 50)


# ============================================================================
# Status classification
# ============================================================================


@pytest.mark.parametrize(
    "status_code,expected",
    [
        (429, True),
        (500, True),
        (502, True),
        (503, True),
        (400, False),
        (401, False),
        (403, False),
        (404, False),
    ],
)
def test_is_retryable_status(status_code, expected):
    assert RetryPolicy().is_retryable_status(status_code) is expected


def test_server_errors_can_be_terminal():
    policy = RetryPolicy(retry_server_errors=False)

    assert policy.is_retryable_status(503) is False
    assert policy.is_retryable_status(429) is True
