"""
Tagged outcomes for attempts and calls.

Two layers:
- AttemptOutcome (AttemptSuccess | RetryableFailure | TerminalFailure) is
  produced per network round-trip and consumed by the retry loop.
- CallResult (Success | EmptySuccess | Failure | Cancelled) is the single
  value returned to the caller of ``ResilientRequestClient.execute``.

Callers distinguish outcomes with ``isinstance`` (or ``match``), never by
inspecting text.
"""

from dataclasses import dataclass
from typing import Optional, Union

from lesson_assistant.exceptions import (
    CallCancelledError,
    RetriesExhaustedError,
    TerminalStatusError,
)
from lesson_assistant.models.enums import ErrorKind

NO_CONTENT_TEXT = "No clear response from AI."


# === Attempt outcomes ===

@dataclass(frozen=True)
class AttemptSuccess:
    """The service answered with a 2xx status."""

    text: str
    empty: bool = False


@dataclass(frozen=True)
class RetryableFailure:
    """Transient failure; the retry loop may try again."""

    kind: ErrorKind
    reason: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class TerminalFailure:
    """Failure that will not go away by retrying."""

    kind: ErrorKind
    reason: str
    status_code: Optional[int] = None


AttemptOutcome = Union[AttemptSuccess, RetryableFailure, TerminalFailure]


# === Call results ===

@dataclass(frozen=True)
class Success:
    """
    The call produced text.

    Attributes:
        text: Generated text
        attempts: Number of network attempts used (1 = no retries)
    """

    text: str
    attempts: int = 1

    def unwrap(self) -> str:
        return self.text


@dataclass(frozen=True)
class EmptySuccess(Success):
    """
    The service answered but produced nothing usable.

    Still a Success: ``text`` is the NO_CONTENT_TEXT sentinel so callers
    that only display text need no special case.
    """

    text: str = NO_CONTENT_TEXT

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.EMPTY_RESULT


@dataclass(frozen=True)
class Failure:
    """
    The call failed and must not be retried by the caller.

    Attributes:
        kind: TERMINAL_STATUS or EXHAUSTED_RETRIES
        message: Diagnostic message (not for end users)
        status_code: HTTP status of the last response, if any
        attempts: Number of network attempts used
        last_reason: Kind of the final attempt failure
    """

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    attempts: int = 1
    last_reason: Optional[ErrorKind] = None

    def __post_init__(self) -> None:
        if self.kind not in (ErrorKind.TERMINAL_STATUS, ErrorKind.EXHAUSTED_RETRIES):
            raise ValueError(f"Failure kind must be terminal or exhausted, got {self.kind}")
        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")

    def unwrap(self) -> str:
        details = {
            "kind": self.kind.value,
            "status_code": self.status_code,
            "attempts": self.attempts,
            "last_reason": self.last_reason.value if self.last_reason else None,
        }
        if self.kind is ErrorKind.TERMINAL_STATUS:
            raise TerminalStatusError(self.message, details=details)
        raise RetriesExhaustedError(self.message, details=details)


@dataclass(frozen=True)
class Cancelled:
    """The caller abandoned the call; ``attempts`` counts requests started."""

    attempts: int = 0

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.CANCELLED

    def unwrap(self) -> str:
        raise CallCancelledError(
            "Call cancelled by caller",
            details={"attempts": self.attempts},
        )


CallResult = Union[Success, EmptySuccess, Failure, Cancelled]
