"""
Enumerations for Lesson Assistant data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """
    Classification of why an attempt or a call did not produce text.

    TRANSPORT_ERROR and RATE_LIMITED are recovered locally by retrying and
    only reach callers as the last reason of an exhausted call.
    EMPTY_RESULT is not an error: the service answered without usable text.
    """

    TRANSPORT_ERROR = "transport_error"
    RATE_LIMITED = "rate_limited"
    TERMINAL_STATUS = "terminal_status"
    EXHAUSTED_RETRIES = "exhausted_retries"
    CANCELLED = "cancelled"
    EMPTY_RESULT = "empty_result"


class AssistantState(str, Enum):
    """Display states reported to the rendering layer."""

    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"
    ERROR = "error"
