"""
Exceptions for the Lesson Assistant.

The request client reports outcomes as tagged CallResult values rather than
raising. These exceptions exist for callers that prefer exception flow
(``CallResult.unwrap()``) and for collaborator misuse (unknown lessons).
"""


class LessonAssistantError(Exception):
    """
    Base exception for all Lesson Assistant errors.

    Carries a human-readable message plus structured details for logging.
    The message is diagnostic and must not be shown to learners verbatim.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TerminalStatusError(LessonAssistantError):
    """
    Raised when the service answered with a non-retryable status (e.g. 400, 403).

    Retrying the same request will not help.
    """
    pass


class RetriesExhaustedError(LessonAssistantError):
    """
    Raised when every attempt in the retry budget hit a transient failure.

    ``details["last_reason"]`` holds the kind of the final failure
    (transport_error or rate_limited).
    """
    pass


class CallCancelledError(LessonAssistantError):
    """Raised when the caller abandoned the call before it finished."""
    pass


class UnknownLessonError(LessonAssistantError):
    """Raised when a lesson id is not part of the course catalog."""
    pass
