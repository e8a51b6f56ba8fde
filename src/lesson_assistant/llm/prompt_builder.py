"""
Prompt builder for assistant requests.

Responsible for:
- The catalog of canned prompts offered next to each lesson
- Substituting the active lesson title into lesson-aware prompts
- Appending the learner's notes when a prompt works on them
- Constructing the RequestSpec sent to the generation client
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from lesson_assistant.models.course import Lesson
from lesson_assistant.models.llm_models import RequestSpec


logger = structlog.get_logger(__name__)

NOTES_SEPARATOR = "\n\nHere are my notes:\n"


class NotesRequiredError(ValueError):
    """The prompt works on the learner's notes but none were written."""


class CannedPrompt(str, Enum):
    """Quick prompts shown as chips beside the lesson player."""

    EXPLAIN_SYSTEM_VS_USER = "explain_system_vs_user"
    NOTES_TO_ACTION_ITEMS = "notes_to_action_items"
    FEW_SHOT_PRACTICE = "few_shot_practice"
    SUMMARIZE_VIDEO = "summarize_video"
    NOTES_QUIZ = "notes_quiz"
    EXPLAIN_NOTES_CONCEPT = "explain_notes_concept"
    LESSON_PRACTICE_PROMPT = "lesson_practice_prompt"


@dataclass(frozen=True)
class PromptTemplate:
    """
    A canned prompt.

    Attributes:
        label: Text shown on the chip
        template: Prompt text; may contain {lesson_title} and {notes}
        include_notes: Whether the learner's notes are appended (and required)
    """

    label: str
    template: str
    include_notes: bool = False

    @property
    def needs_lesson(self) -> bool:
        return "{lesson_title}" in self.template


PROMPT_TEMPLATES: dict[CannedPrompt, PromptTemplate] = {
    CannedPrompt.EXPLAIN_SYSTEM_VS_USER: PromptTemplate(
        label="Explain system vs user prompts with simple examples.",
        template="Explain system vs user prompts with simple examples.",
    ),
    CannedPrompt.NOTES_TO_ACTION_ITEMS: PromptTemplate(
        label="Turn my notes into bullet points and action items.",
        template="Turn my notes into bullet points and action items.",
        include_notes=True,
    ),
    CannedPrompt.FEW_SHOT_PRACTICE: PromptTemplate(
        label="Suggest 3 practice prompts for few-shot email rewriting.",
        template="Suggest 3 practice prompts for few-shot email rewriting.",
    ),
    CannedPrompt.SUMMARIZE_VIDEO: PromptTemplate(
        label="Summarize the current video's topic in 3 key points.",
        template=(
            "Summarize the current video's topic in 3 key points."
            ' based on the video titled "{lesson_title}".'
        ),
    ),
    CannedPrompt.NOTES_QUIZ: PromptTemplate(
        label="Create a mini quiz (3 questions) based on my notes.",
        template="Create a mini quiz (3 questions) based on my notes.",
        include_notes=True,
    ),
    CannedPrompt.EXPLAIN_NOTES_CONCEPT: PromptTemplate(
        label="Explain a complex concept from my notes.",
        template="Explain the following concept from my notes in simple terms:\n\n{notes}",
        include_notes=True,
    ),
    CannedPrompt.LESSON_PRACTICE_PROMPT: PromptTemplate(
        label="Generate a practice prompt based on this lesson.",
        template=(
            "Generate a practice prompt for a large language model based on the lesson"
            ' titled "{lesson_title}". Focus on a key concept from the lesson.'
        ),
    ),
}


class PromptBuilder:
    """
    Build RequestSpecs from canned or free-form prompts.

    Notes are appended as ``<prompt>\\n\\nHere are my notes:\\n<notes>`` when a
    prompt asks for them. A notes-based prompt with blank notes raises
    NotesRequiredError so the caller can tell the learner without calling
    the service.
    """

    def __init__(self, model: str):
        """
        Args:
            model: Target model identifier put into every RequestSpec
        """
        if not model:
            raise ValueError("model must not be empty")
        self.model = model

    def compose(self, prompt: str, notes: Optional[str] = None, include_notes: bool = False) -> str:
        """
        Combine a prompt with the learner's notes.

        Raises:
            NotesRequiredError: include_notes is set but notes are blank
        """
        if not include_notes:
            return prompt
        if notes is None or not notes.strip():
            raise NotesRequiredError("Notes are required for this prompt")
        return f"{prompt}{NOTES_SEPARATOR}{notes}"

    def render_canned(
        self,
        prompt: CannedPrompt,
        lesson: Optional[Lesson] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Render a canned prompt for the active lesson and notes."""
        template = PROMPT_TEMPLATES[prompt]
        if template.needs_lesson and lesson is None:
            raise ValueError(f"Prompt {prompt.value} needs an active lesson")

        # Check notes before substituting them into the template
        if template.include_notes and (notes is None or not notes.strip()):
            raise NotesRequiredError("Notes are required for this prompt")

        text = template.template.format(
            lesson_title=lesson.title if lesson else "",
            notes=notes or "",
        )
        return self.compose(text, notes=notes, include_notes=template.include_notes)

    def build_canned(
        self,
        prompt: CannedPrompt,
        lesson: Optional[Lesson] = None,
        notes: Optional[str] = None,
    ) -> RequestSpec:
        payload = self.render_canned(prompt, lesson=lesson, notes=notes)
        logger.debug("Built canned prompt", prompt=prompt.value, payload_length=len(payload))
        return RequestSpec(payload=payload, endpoint=self.model)

    def build_custom(self, question: str, notes: Optional[str] = None) -> RequestSpec:
        """
        Build a free-form question about the learner's notes.

        The notes are always appended, so blank notes raise
        NotesRequiredError just like the canned notes prompts.
        """
        if not question.strip():
            raise ValueError("question must not be blank")
        payload = self.compose(question, notes=notes, include_notes=True)
        return RequestSpec(payload=payload, endpoint=self.model)
