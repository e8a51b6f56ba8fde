"""
Course player services.

- StudyAssistant: prompt chips and questions -> display states
- CourseProgress: completed lessons and learner name on a KeyValueStore
"""

from lesson_assistant.course.assistant import (
    GENERIC_ERROR_TEXT,
    NOTES_REQUIRED_TEXT,
    THINKING_TEXT,
    TIP_TEXT,
    AssistantReply,
    StudyAssistant,
)
from lesson_assistant.course.progress import CourseProgress

__all__ = [
    "GENERIC_ERROR_TEXT",
    "NOTES_REQUIRED_TEXT",
    "THINKING_TEXT",
    "TIP_TEXT",
    "AssistantReply",
    "StudyAssistant",
    "CourseProgress",
]
