"""
Attempt classification.

Maps the result of one network round-trip onto an AttemptOutcome:

    request error / per-attempt timeout     -> RetryableFailure(TRANSPORT_ERROR)
    status in retryable_status_codes (429)  -> RetryableFailure(RATE_LIMITED)
    5xx (when retry_server_errors)          -> RetryableFailure(TRANSPORT_ERROR)
    any other non-2xx                       -> TerminalFailure(TERMINAL_STATUS)
    2xx without usable text                 -> AttemptSuccess(NO_CONTENT_TEXT, empty=True)
    2xx with text                           -> AttemptSuccess(text)

DNS failures, connection resets and timeouts are not told apart: all of
them are retryable transport errors.
"""

import asyncio
import json

import httpx
import structlog

from lesson_assistant.llm.envelope import extract_text
from lesson_assistant.models.enums import ErrorKind
from lesson_assistant.models.results import (
    NO_CONTENT_TEXT,
    AttemptOutcome,
    AttemptSuccess,
    RetryableFailure,
    TerminalFailure,
)
from lesson_assistant.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

# Cap on how much of an error body is kept in a diagnostic reason
_MAX_REASON_BODY = 200


def classify_transport_error(error: BaseException) -> RetryableFailure:
    """
    Any failure to obtain a usable response is transient.

    Covers every httpx.RequestError (connect, read, protocol, body decoding,
    redirect loops) and the per-attempt asyncio timeout.
    """
    if isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        reason = f"Request timed out ({type(error).__name__})"
    else:
        reason = f"Transport error: {type(error).__name__}: {error}"
    return RetryableFailure(kind=ErrorKind.TRANSPORT_ERROR, reason=reason)


def classify_response(response: httpx.Response, policy: RetryPolicy) -> AttemptOutcome:
    """Classify a received HTTP response according to ``policy``."""
    status_code = response.status_code

    if response.is_success:
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                "Success response is not valid JSON",
                status_code=status_code,
                error=str(e),
            )
            return AttemptSuccess(text=NO_CONTENT_TEXT, empty=True)

        text = extract_text(data)
        if text is None:
            logger.info("Success response carried no result text", status_code=status_code)
            return AttemptSuccess(text=NO_CONTENT_TEXT, empty=True)
        return AttemptSuccess(text=text)

    body = response.text[:_MAX_REASON_BODY]
    reason = f"HTTP {status_code} {response.reason_phrase}: {body}".rstrip(": ")

    if status_code in policy.retryable_status_codes:
        return RetryableFailure(kind=ErrorKind.RATE_LIMITED, reason=reason, status_code=status_code)

    if policy.is_retryable_status(status_code):
        return RetryableFailure(kind=ErrorKind.TRANSPORT_ERROR, reason=reason, status_code=status_code)

    return TerminalFailure(kind=ErrorKind.TERMINAL_STATUS, reason=reason, status_code=status_code)
