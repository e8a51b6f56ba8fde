"""
Learner progress for a course.

Keeps two values in the injected KeyValueStore:
- ``completedLessons``: JSON array of completed lesson ids
- ``userName``: the name printed on the completion certificate

Reads never block the player: a store that cannot be read, or a stored value
that cannot be decoded, is logged and treated as empty. Errors while
marking a lesson complete propagate to the caller.
"""

import asyncio
import json
from typing import Optional

import structlog

from lesson_assistant.exceptions import UnknownLessonError
from lesson_assistant.models.course import ART_OF_THE_PROMPT, Course, Lesson
from lesson_assistant.persistence.store import KeyValueStore

logger = structlog.get_logger(__name__)


class CourseProgress:
    """
    Completion tracking for one learner on one course.

    Share one instance per learner: concurrent ``mark_complete`` calls on
    the same instance are serialized so no completion is lost.
    """

    COMPLETED_KEY = "completedLessons"
    USER_NAME_KEY = "userName"

    def __init__(self, store: KeyValueStore, course: Course = ART_OF_THE_PROMPT):
        self.store = store
        self.course = course
        # Serializes read-modify-write of the completed set
        self._lock = asyncio.Lock()

    async def _read(self, key: str) -> Optional[str]:
        try:
            return await self.store.get(key)
        except Exception as e:
            logger.error("Failed to load progress", key=key, error=str(e))
            return None

    async def completed_lessons(self) -> set[str]:
        return self._decode_completed(await self._read(self.COMPLETED_KEY))

    def _decode_completed(self, raw: Optional[str]) -> set[str]:
        if not raw:
            return set()
        try:
            ids = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Failed to decode completed lessons", error=str(e))
            return set()
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            logger.error("Completed lessons is not a list of ids", value_type=type(ids).__name__)
            return set()
        return set(ids)

    async def _save_completed(self, completed: set[str]) -> None:
        # Course order first, then anything no longer in the catalog
        ordered = [i for i in self.course.lesson_ids if i in completed]
        ordered += sorted(completed - set(ordered))
        await self.store.set(self.COMPLETED_KEY, json.dumps(ordered))

    def lesson(self, lesson_id: str) -> Lesson:
        lesson = self.course.get_lesson(lesson_id)
        if lesson is None:
            raise UnknownLessonError(
                f"Lesson {lesson_id!r} is not part of {self.course.title!r}",
                details={"lesson_id": lesson_id, "course": self.course.title},
            )
        return lesson

    async def mark_complete(self, lesson_id: str) -> set[str]:
        """
        Mark a lesson complete. Idempotent.

        Returns:
            The updated set of completed lesson ids

        Raises:
            UnknownLessonError: lesson_id is not in the course
        """
        self.lesson(lesson_id)
        async with self._lock:
            # Read straight from the store: an unreadable value must not be overwritten
            completed = self._decode_completed(await self.store.get(self.COMPLETED_KEY))
            if lesson_id not in completed:
                completed.add(lesson_id)
                await self._save_completed(completed)
                logger.info(
                    "Lesson completed",
                    lesson_id=lesson_id,
                    completed=len(completed & set(self.course.lesson_ids)),
                    total=len(self.course.lessons),
                )
        return completed

    async def is_complete(self, lesson_id: str) -> bool:
        return lesson_id in await self.completed_lessons()

    async def completion_ratio(self) -> float:
        """Fraction of catalog lessons completed, in [0, 1]."""
        done = await self.completed_lessons() & set(self.course.lesson_ids)
        return len(done) / len(self.course.lessons)

    async def is_course_complete(self) -> bool:
        return await self.completion_ratio() == 1.0

    async def next_lesson(self) -> Optional[Lesson]:
        """First lesson in course order that is not yet completed."""
        completed = await self.completed_lessons()
        for lesson in self.course.lessons:
            if lesson.id not in completed:
                return lesson
        return None

    async def get_user_name(self) -> str:
        return await self._read(self.USER_NAME_KEY) or ""

    async def set_user_name(self, name: str) -> None:
        await self.store.set(self.USER_NAME_KEY, name)
