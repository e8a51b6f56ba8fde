"""
Data models for the Lesson Assistant.

Includes:
- Enums (ErrorKind, AssistantState)
- RequestSpec (pydantic, frozen)
- Attempt outcomes and call results (frozen dataclasses)
- Course catalog (Lesson, Course, ART_OF_THE_PROMPT)
"""

from lesson_assistant.models.enums import AssistantState, ErrorKind
from lesson_assistant.models.llm_models import RequestSpec
from lesson_assistant.models.results import (
    NO_CONTENT_TEXT,
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
from lesson_assistant.models.course import ART_OF_THE_PROMPT, Course, Lesson

__all__ = [
    "AssistantState",
    "ErrorKind",
    "RequestSpec",
    "NO_CONTENT_TEXT",
    "AttemptOutcome",
    "AttemptSuccess",
    "CallResult",
    "Cancelled",
    "EmptySuccess",
    "Failure",
    "RetryableFailure",
    "Success",
    "TerminalFailure",
    "ART_OF_THE_PROMPT",
    "Course",
    "Lesson",
]
