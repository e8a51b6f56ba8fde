"""
Unit tests for StudyAssistant state handling.
"""

import asyncio

import pytest

from lesson_assistant.course.assistant import (
    GENERIC_ERROR_TEXT,
    NOTES_REQUIRED_TEXT,
    THINKING_TEXT,
    TIP_TEXT,
    StudyAssistant,
)
from lesson_assistant.llm.prompt_builder import CannedPrompt, PromptBuilder
from lesson_assistant.models.enums import AssistantState, ErrorKind
from lesson_assistant.models.results import Cancelled, EmptySuccess, Failure, Success
from lesson_assistant.retry.cancellation import CancelToken

NOTES = "- system prompts set behaviour\n- user prompts ask for output"


@pytest.fixture
def states():
    return []


@pytest.fixture
def assistant(mock_generation_client, states):
    return StudyAssistant(
        client=mock_generation_client,
        prompt_builder=PromptBuilder(model="gemini-test"),
        on_state=lambda state, text: states.append((state, text)),
    )


def test_starts_with_tip(assistant):
    assert assistant.text == TIP_TEXT
    assert assistant.is_loading is False


@pytest.mark.asyncio
async def test_success_shows_text(assistant, mock_generation_client, states, sample_lesson):
    mock_generation_client.execute.return_value = Success(text="1. a\n2. b\n3. c")

    reply = await assistant.ask_canned(CannedPrompt.SUMMARIZE_VIDEO, lesson=sample_lesson)

    assert reply.state is AssistantState.RESULT
    assert reply.text == "1. a\n2. b\n3. c"
    assert states == [
        (AssistantState.LOADING, THINKING_TEXT),
        (AssistantState.RESULT, "1. a\n2. b\n3. c"),
    ]
    spec = mock_generation_client.execute.call_args.args[0]
    assert sample_lesson.title in spec.payload
    assert spec.endpoint == "gemini-test"


@pytest.mark.asyncio
async def test_empty_success_shows_sentinel(assistant, mock_generation_client):
    mock_generation_client.execute.return_value = EmptySuccess()

    reply = await assistant.ask_custom("Anything?", notes=NOTES)

    assert reply.state is AssistantState.RESULT
    assert reply.text == "No clear response from AI."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [
        Failure(kind=ErrorKind.TERMINAL_STATUS, message="HTTP 400 Bad Request: API key not valid", status_code=400),
        Failure(
            kind=ErrorKind.EXHAUSTED_RETRIES,
            message="HTTP 429 Too Many Requests",
            status_code=429,
            attempts=5,
            last_reason=ErrorKind.RATE_LIMITED,
        ),
    ],
)
async def test_failure_shows_generic_message(assistant, mock_generation_client, states, failure):
    mock_generation_client.execute.return_value = failure

    reply = await assistant.ask_custom("Explain tokens", notes=NOTES)

    assert reply.state is AssistantState.ERROR
    assert reply.text == GENERIC_ERROR_TEXT
    assert reply.result is failure
    assert failure.message not in reply.text
    assert states[-1] == (AssistantState.ERROR, GENERIC_ERROR_TEXT)


@pytest.mark.asyncio
async def test_missing_notes_skips_call(assistant, mock_generation_client, states):
    reply = await assistant.ask_canned(CannedPrompt.NOTES_QUIZ, notes="   ")

    assert reply.state is AssistantState.ERROR
    assert reply.text == NOTES_REQUIRED_TEXT
    assert states == [(AssistantState.ERROR, NOTES_REQUIRED_TEXT)]
    mock_generation_client.execute.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("notes", [None, "", "  \n"])
async def test_custom_question_without_notes_skips_call(
    assistant, mock_generation_client, states, notes
):
    reply = await assistant.ask_custom("What is few-shot prompting?", notes=notes)

    assert reply.state is AssistantState.ERROR
    assert reply.text == NOTES_REQUIRED_TEXT
    assert states == [(AssistantState.ERROR, NOTES_REQUIRED_TEXT)]
    mock_generation_client.execute.assert_not_called()


@pytest.mark.asyncio
async def test_notes_are_sent(assistant, mock_generation_client):
    mock_generation_client.execute.return_value = Success(text="quiz")

    await assistant.ask_canned(CannedPrompt.NOTES_QUIZ, notes="- few-shot")

    spec = mock_generation_client.execute.call_args.args[0]
    assert spec.payload.endswith("Here are my notes:\n- few-shot")


@pytest.mark.asyncio
async def test_cancelled_restores_previous_text(assistant, mock_generation_client, states):
    token = CancelToken()
    mock_generation_client.execute.return_value = Cancelled(attempts=1)

    reply = await assistant.ask_custom("Explain tokens", notes=NOTES, cancel_token=token)

    assert reply.state is AssistantState.IDLE
    assert reply.text == TIP_TEXT
    assert states[-1] == (AssistantState.IDLE, TIP_TEXT)
    assert mock_generation_client.execute.call_args.kwargs["cancel_token"] is token


@pytest.mark.asyncio
async def test_is_loading_while_call_in_flight(assistant, mock_generation_client):
    release = asyncio.Event()
    seen_loading = []

    async def slow_execute(spec, cancel_token=None):
        seen_loading.append(assistant.is_loading)
        await release.wait()
        return Success(text="done")

    mock_generation_client.execute.side_effect = slow_execute

    task = asyncio.create_task(assistant.ask_custom("Explain tokens", notes=NOTES))
    await asyncio.sleep(0)
    assert assistant.is_loading is True
    assert assistant.text == THINKING_TEXT

    release.set()
    await task

    assert seen_loading == [True]
    assert assistant.is_loading is False


@pytest.mark.asyncio
async def test_loading_cleared_when_client_raises(assistant, mock_generation_client):
    mock_generation_client.execute.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await assistant.ask_custom("Explain tokens", notes=NOTES)

    assert assistant.is_loading is False


@pytest.mark.asyncio
async def test_reset_restores_tip(assistant, mock_generation_client, states):
    mock_generation_client.execute.return_value = Success(text="answer")
    await assistant.ask_custom("Explain tokens", notes=NOTES)

    assistant.reset()

    assert assistant.text == TIP_TEXT
    assert states[-1] == (AssistantState.IDLE, TIP_TEXT)


def test_works_without_callback(mock_generation_client):
    assistant = StudyAssistant(mock_generation_client, PromptBuilder(model="gemini-test"))

    assistant.reset()

    assert assistant.text == TIP_TEXT
