"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from typing import Any, Dict

import pytest

from lesson_assistant.config import Settings
from lesson_assistant.models.course import ART_OF_THE_PROMPT, Lesson
from lesson_assistant.models.llm_models import RequestSpec


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_ATTEMPTS = 2
    """
    return Settings(
        # === Application ===
        APP_NAME="Lesson Assistant (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Gemini ===
        GEMINI_BASE_URL="https://generativelanguage.test/v1beta",
        GEMINI_MODEL="gemini-test",
        GEMINI_API_KEY="test-key",
        REQUEST_TIMEOUT=5.0,

        # === Retry ===
        MAX_ATTEMPTS=3,
        BASE_DELAY_MS=10,
        JITTER_MAX_MS=5,
        RETRYABLE_STATUS_CODES=[429],

        # === Redis ===
        REDIS_URL="redis://localhost:6379/0",
        REDIS_MAX_CONNECTIONS=5,
        PROGRESS_KEY_PREFIX="lesson-assistant-test",

        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def sample_lesson() -> Lesson:
    """First lesson of the default course."""
    return ART_OF_THE_PROMPT.lessons[0]


@pytest.fixture
def sample_spec() -> RequestSpec:
    """Minimal request for the test model."""
    return RequestSpec(payload="Explain system vs user prompts.", endpoint="gemini-test")


def gemini_body(text: str) -> Dict[str, Any]:
    """Well-formed generateContent response carrying ``text``."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def make_gemini_body():
    """Factory fixture for well-formed response bodies."""
    return gemini_body
