"""
Request model for the text-generation client.

RequestSpec is the caller-facing description of one logical call. It is
independent of the wire envelope (see ``lesson_assistant.llm.envelope``)
so the retry client can be reused against any generateContent-style model.
"""

from pydantic import BaseModel, ConfigDict, Field


class RequestSpec(BaseModel):
    """
    One logical text-generation request.

    Immutable for the lifetime of a call: every retry sends exactly the
    same payload to the same endpoint.
    """
    model_config = ConfigDict(frozen=True)

    payload: str = Field(..., min_length=1, description="Prompt text sent as the user turn")
    endpoint: str = Field(
        ...,
        min_length=1,
        description="Target model identifier (e.g. 'gemini-2.5-flash-preview-05-20')",
    )
