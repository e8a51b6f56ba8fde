"""
Application wiring for the Lesson Assistant.

The host (a web backend, a desktop shell, a notebook) creates one
LessonAssistantApp, opens it with ``async with``, and builds per-learner
services from it. The generation client is shared; stores and progress are
per learner.
"""

from typing import Optional

import structlog

from lesson_assistant.config import Settings, settings as default_settings
from lesson_assistant.course.assistant import StateCallback, StudyAssistant
from lesson_assistant.course.progress import CourseProgress
from lesson_assistant.llm.base_client import BaseTextGenerationClient
from lesson_assistant.llm.prompt_builder import PromptBuilder
from lesson_assistant.llm.resilient_client import ResilientRequestClient
from lesson_assistant.logging_config import configure_logging
from lesson_assistant.models.course import ART_OF_THE_PROMPT, Course
from lesson_assistant.persistence.redis_client import RedisClient
from lesson_assistant.persistence.store import KeyValueStore, RedisKeyValueStore

logger = structlog.get_logger(__name__)


class LessonAssistantApp:
    """
    Owns the shared resources: settings, generation client, prompt builder.

    Args:
        settings: Application settings (defaults to the environment)
        client: Pre-built generation client (defaults to ResilientRequestClient.from_settings)
        course: Course catalog
        configure_logs: Configure structlog on startup
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[BaseTextGenerationClient] = None,
        course: Course = ART_OF_THE_PROMPT,
        configure_logs: bool = True,
    ):
        self.settings = settings or default_settings
        self.course = course
        self._configure_logs = configure_logs
        self.client = client or ResilientRequestClient.from_settings(self.settings)
        self.prompt_builder = PromptBuilder(model=self.settings.GEMINI_MODEL)
        self._progress: dict[str, CourseProgress] = {}

    async def startup(self) -> None:
        if self._configure_logs:
            configure_logging(
                self.settings.LOG_LEVEL,
                self.settings.ENVIRONMENT,
                app_name=self.settings.APP_NAME,
            )
        logger.info(
            "Application startup",
            version=self.settings.APP_VERSION,
            environment=self.settings.ENVIRONMENT,
            model=self.settings.GEMINI_MODEL,
            course=self.course.title,
            lessons=len(self.course.lessons),
        )
        if not self.settings.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY is empty; requests will be sent without credentials")

    async def shutdown(self) -> None:
        logger.info("Application shutdown")
        await self.client.close()
        await RedisClient.close_async_pool()
        logger.info("Application shutdown complete")

    async def __aenter__(self) -> "LessonAssistantApp":
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()

    def assistant(self, on_state: Optional[StateCallback] = None) -> StudyAssistant:
        """New assistant panel bound to the shared client."""
        return StudyAssistant(self.client, self.prompt_builder, on_state=on_state)

    def progress(self, learner_id: str, store: Optional[KeyValueStore] = None) -> CourseProgress:
        """
        Progress for one learner; Redis-backed unless a store is given.

        The Redis-backed instance is cached per learner so every caller
        shares its completion lock.
        """
        if store is not None:
            return CourseProgress(store, course=self.course)
        if learner_id not in self._progress:
            store = RedisKeyValueStore.from_settings(self.settings, namespace=learner_id)
            self._progress[learner_id] = CourseProgress(store, course=self.course)
        return self._progress[learner_id]
