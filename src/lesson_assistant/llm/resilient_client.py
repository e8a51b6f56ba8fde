"""
Resilient client for the Gemini generateContent API.

Communicates with the API using httpx AsyncClient. Supports:
- Bounded exponential-backoff retry with jitter (RetryPolicy)
- Retryable vs terminal status classification (429 and 5xx retried)
- Per-attempt timeout
- Cooperative cancellation during requests and backoff waits
- Connection pooling via a persistent AsyncClient
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import structlog

from lesson_assistant.config import Settings
from lesson_assistant.llm.base_client import BaseTextGenerationClient
from lesson_assistant.llm.classifier import classify_response, classify_transport_error
from lesson_assistant.llm.envelope import encode_request
from lesson_assistant.models.enums import ErrorKind
from lesson_assistant.models.llm_models import RequestSpec
from lesson_assistant.models.results import (
    AttemptOutcome,
    AttemptSuccess,
    CallResult,
    Cancelled,
    EmptySuccess,
    Failure,
    RetryableFailure,
    Success,
    TerminalFailure,
)
from lesson_assistant.monitoring.metrics import (
    attempt_latency_seconds,
    attempts_total,
    calls_total,
    retries_total,
)
from lesson_assistant.retry.cancellation import CallAbandoned, CancelToken
from lesson_assistant.retry.policy import RetryPolicy


logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class ResilientRequestClient(BaseTextGenerationClient):
    """
    generateContent client with retry, backoff and cancellation.

    API Endpoint:
    - POST {base_url}/models/{endpoint}:generateContent?key={api_key}

    One instance is meant to be shared by many concurrent calls. The only
    state shared between calls is the immutable policy and the connection
    pool; attempt counters are local to each ``execute``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: str = "",
        policy: Optional[RetryPolicy] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        connection_limits: Optional[httpx.Limits] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        rng: Optional[random.Random] = None,
        metrics_enabled: bool = True,
        **kwargs
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. https://generativelanguage.googleapis.com/v1beta
            api_key: Credential sent as the ``key`` query parameter (omitted if empty)
            policy: Retry policy (defaults to RetryPolicy())
            timeout: Per-attempt timeout in seconds
            http_client: Pre-built AsyncClient; the caller keeps ownership
            connection_limits: httpx pool limits for the internally created client
            sleep: Coroutine used for backoff waits (seconds)
            rng: Random source for jitter (defaults to the ``random`` module)
            metrics_enabled: Record Prometheus metrics
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)
        self.api_key = api_key
        self.policy = policy or RetryPolicy()
        self.metrics_enabled = metrics_enabled

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None
        self._connection_limits = connection_limits
        self._sleep = sleep
        self._rng = rng

        logger.info(
            "Resilient request client initialized",
            base_url=self.base_url,
            timeout=timeout,
            max_attempts=self.policy.max_attempts,
            base_delay_ms=self.policy.base_delay_ms,
            jitter_max_ms=self.policy.jitter_max_ms,
            retryable_status_codes=sorted(self.policy.retryable_status_codes),
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ResilientRequestClient":
        """Build a client from application settings; kwargs override."""
        options = dict(
            base_url=settings.GEMINI_BASE_URL,
            api_key=settings.GEMINI_API_KEY,
            policy=RetryPolicy.from_settings(settings),
            timeout=settings.REQUEST_TIMEOUT,
            metrics_enabled=settings.PROMETHEUS_ENABLED,
        )
        options.update(kwargs)
        return cls(**options)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or (self._owns_client and self._client.is_closed):
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/models/{endpoint}:generateContent"

    async def _send(self, spec: RequestSpec) -> httpx.Response:
        client = await self._get_client()
        params = {"key": self.api_key} if self.api_key else None
        return await client.post(
            self.url_for(spec.endpoint),
            json=encode_request(spec.payload),
            params=params,
            timeout=self.timeout,
        )

    @staticmethod
    async def _guard(awaitable: Awaitable[T], cancel_token: Optional[CancelToken]) -> T:
        if cancel_token is None:
            return await awaitable
        return await cancel_token.race(awaitable)

    async def _attempt(
        self, spec: RequestSpec, cancel_token: Optional[CancelToken]
    ) -> AttemptOutcome:
        """One network round-trip, classified. Raises CallAbandoned on cancel."""
        started = time.monotonic()
        try:
            response = await self._guard(
                asyncio.wait_for(self._send(spec), timeout=self.timeout),
                cancel_token,
            )
        except (httpx.RequestError, asyncio.TimeoutError) as e:
            outcome: AttemptOutcome = classify_transport_error(e)
        else:
            outcome = classify_response(response, self.policy)

        if self.metrics_enabled:
            attempt_latency_seconds.labels(model=spec.endpoint).observe(time.monotonic() - started)
            attempts_total.labels(model=spec.endpoint, outcome=_outcome_label(outcome)).inc()
        return outcome

    async def execute(
        self,
        spec: RequestSpec,
        cancel_token: Optional[CancelToken] = None,
    ) -> CallResult:
        """
        Run one logical call under the retry policy.

        Attempts are strictly sequential. Before attempt n (n >= 2) the call
        waits ``policy.delay_for_attempt(n)`` milliseconds.

        Returns:
            Success / EmptySuccess on a 2xx answer,
            Failure(TERMINAL_STATUS) on a non-retryable status,
            Failure(EXHAUSTED_RETRIES) when the budget is spent,
            Cancelled when ``cancel_token`` fires first.
        """
        log = logger.bind(endpoint=spec.endpoint, payload_length=len(spec.payload))
        attempts_made = 0
        last_failure: Optional[RetryableFailure] = None

        try:
            for attempt in range(1, self.policy.max_attempts + 1):
                if attempt > 1:
                    delay_ms = self.policy.delay_for_attempt(attempt, self._rng)
                    log.info(
                        "Backing off before retry",
                        attempt=attempt,
                        max_attempts=self.policy.max_attempts,
                        delay_ms=round(delay_ms),
                        reason=last_failure.kind.value if last_failure else None,
                    )
                    if self.metrics_enabled and last_failure is not None:
                        retries_total.labels(reason=last_failure.kind.value).inc()
                    await self._guard(self._sleep(delay_ms / 1000.0), cancel_token)

                if cancel_token is not None and cancel_token.cancelled:
                    raise CallAbandoned()

                attempts_made = attempt
                outcome = await self._attempt(spec, cancel_token)

                if isinstance(outcome, AttemptSuccess):
                    log.info(
                        "Generation succeeded",
                        attempt=attempt,
                        empty=outcome.empty,
                    )
                    if outcome.empty:
                        return self._finish(EmptySuccess(text=outcome.text, attempts=attempt))
                    return self._finish(Success(text=outcome.text, attempts=attempt))

                if isinstance(outcome, TerminalFailure):
                    log.error(
                        "Terminal failure, not retrying",
                        attempt=attempt,
                        status_code=outcome.status_code,
                        reason=outcome.reason,
                    )
                    return self._finish(Failure(
                        kind=ErrorKind.TERMINAL_STATUS,
                        message=outcome.reason,
                        status_code=outcome.status_code,
                        attempts=attempt,
                        last_reason=outcome.kind,
                    ))

                last_failure = outcome
                log.warning(
                    "Retryable failure",
                    attempt=attempt,
                    max_attempts=self.policy.max_attempts,
                    kind=outcome.kind.value,
                    status_code=outcome.status_code,
                    reason=outcome.reason,
                )

        except CallAbandoned:
            log.info("Call cancelled by caller", attempts=attempts_made)
            return self._finish(Cancelled(attempts=attempts_made))

        if last_failure is None:
            # max_attempts >= 1, so the loop always records a failure before falling through
            raise RuntimeError("Retry loop ended without an outcome")
        log.error(
            "Retry budget exhausted",
            attempts=attempts_made,
            last_reason=last_failure.kind.value,
        )
        return self._finish(Failure(
            kind=ErrorKind.EXHAUSTED_RETRIES,
            message=last_failure.reason,
            status_code=last_failure.status_code,
            attempts=attempts_made,
            last_reason=last_failure.kind,
        ))

    def _finish(self, result: CallResult) -> CallResult:
        if self.metrics_enabled:
            calls_total.labels(result=_result_label(result)).inc()
        return result

    async def close(self):
        """Close the HTTP client connection if this instance created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed generateContent client connection")


def _outcome_label(outcome: AttemptOutcome) -> str:
    if isinstance(outcome, AttemptSuccess):
        return ErrorKind.EMPTY_RESULT.value if outcome.empty else "success"
    return outcome.kind.value


def _result_label(result: CallResult) -> str:
    if isinstance(result, EmptySuccess):
        return ErrorKind.EMPTY_RESULT.value
    if isinstance(result, Success):
        return "success"
    return result.kind.value
