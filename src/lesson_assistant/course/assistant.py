"""
Study assistant: the caller side of the text-generation client.

Turns learner actions (canned prompt chips, free-form questions) into
RequestSpecs, runs them through the client, and reports display states to
the rendering layer through a callback. This is the only place that turns
a CallResult into learner-facing text.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from lesson_assistant.llm.base_client import BaseTextGenerationClient
from lesson_assistant.llm.prompt_builder import CannedPrompt, NotesRequiredError, PromptBuilder
from lesson_assistant.models.course import Lesson
from lesson_assistant.models.enums import AssistantState
from lesson_assistant.models.llm_models import RequestSpec
from lesson_assistant.models.results import CallResult, Cancelled, Failure, Success
from lesson_assistant.retry.cancellation import CancelToken

logger = structlog.get_logger(__name__)

TIP_TEXT = "Tip: Ask the AI to extract key patterns from this lesson and create a mini quiz."
THINKING_TEXT = "Thinking..."
NOTES_REQUIRED_TEXT = "Please write some notes first before asking the AI to process them!"
GENERIC_ERROR_TEXT = "Oops! Something went wrong. Please try again later."

StateCallback = Callable[[AssistantState, str], None]


@dataclass(frozen=True)
class AssistantReply:
    """What the learner ends up seeing, plus the raw result when a call was made."""

    state: AssistantState
    text: str
    result: Optional[CallResult] = None


class StudyAssistant:
    """
    Drive the AI study buddy panel.

    State transitions reported through ``on_state``:
        LOADING("Thinking...") -> RESULT(text) | ERROR(generic message)
        LOADING -> IDLE(previous text) when the call is cancelled
        ERROR(notes required) without LOADING when notes are missing
    """

    def __init__(
        self,
        client: BaseTextGenerationClient,
        prompt_builder: PromptBuilder,
        on_state: Optional[StateCallback] = None,
    ):
        self.client = client
        self.prompt_builder = prompt_builder
        self.on_state = on_state
        self._in_flight = 0
        self._text = TIP_TEXT

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def text(self) -> str:
        """Text currently shown in the response panel."""
        return self._text

    def reset(self) -> None:
        """Restore the tip text (e.g. when the active lesson changes)."""
        if not self.is_loading:
            self._emit(AssistantState.IDLE, TIP_TEXT)

    async def ask_canned(
        self,
        prompt: CannedPrompt,
        lesson: Optional[Lesson] = None,
        notes: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> AssistantReply:
        try:
            spec = self.prompt_builder.build_canned(prompt, lesson=lesson, notes=notes)
        except NotesRequiredError:
            return self._emit(AssistantState.ERROR, NOTES_REQUIRED_TEXT)
        return await self._run(spec, cancel_token)

    async def ask_custom(
        self,
        question: str,
        notes: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> AssistantReply:
        try:
            spec = self.prompt_builder.build_custom(question, notes=notes)
        except NotesRequiredError:
            return self._emit(AssistantState.ERROR, NOTES_REQUIRED_TEXT)
        return await self._run(spec, cancel_token)

    async def _run(self, spec: RequestSpec, cancel_token: Optional[CancelToken]) -> AssistantReply:
        previous_text = self._text
        self._in_flight += 1
        self._emit(AssistantState.LOADING, THINKING_TEXT)
        try:
            result = await self.client.execute(spec, cancel_token=cancel_token)
        finally:
            self._in_flight -= 1

        if isinstance(result, Success):
            return self._emit(AssistantState.RESULT, result.text, result)

        if isinstance(result, Cancelled):
            return self._emit(AssistantState.IDLE, previous_text, result)

        if isinstance(result, Failure):
            logger.warning(
                "Assistant request failed",
                kind=result.kind.value,
                status_code=result.status_code,
                attempts=result.attempts,
                message=result.message,
            )
        return self._emit(AssistantState.ERROR, GENERIC_ERROR_TEXT, result)

    def _emit(
        self,
        state: AssistantState,
        text: str,
        result: Optional[CallResult] = None,
    ) -> AssistantReply:
        self._text = text
        if self.on_state is not None:
            self.on_state(state, text)
        return AssistantReply(state=state, text=text, result=result)
