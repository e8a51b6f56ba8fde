"""
Text-generation client abstraction and implementations.

Components:
- BaseTextGenerationClient: Abstract base class for generation clients
- ResilientRequestClient: Gemini generateContent client with retry/backoff
- PromptBuilder: Canned and free-form prompts -> RequestSpec
- envelope: generateContent request/response (de)serialization
- classifier: HTTP outcome -> AttemptOutcome
"""

from lesson_assistant.llm.base_client import BaseTextGenerationClient
from lesson_assistant.llm.resilient_client import ResilientRequestClient
from lesson_assistant.llm.prompt_builder import (
    CannedPrompt,
    NotesRequiredError,
    PromptBuilder,
    PROMPT_TEMPLATES,
)
from lesson_assistant.llm.envelope import decode_request, encode_request, extract_text

__all__ = [
    "BaseTextGenerationClient",
    "ResilientRequestClient",
    "CannedPrompt",
    "NotesRequiredError",
    "PromptBuilder",
    "PROMPT_TEMPLATES",
    "decode_request",
    "encode_request",
    "extract_text",
]
