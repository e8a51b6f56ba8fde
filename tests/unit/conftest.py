"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from typing import Callable, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

from lesson_assistant.llm.base_client import BaseTextGenerationClient
from lesson_assistant.llm.resilient_client import ResilientRequestClient
from lesson_assistant.persistence.store import InMemoryKeyValueStore
from lesson_assistant.retry.policy import RetryPolicy

TEST_BASE_URL = "https://generativelanguage.test/v1beta"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records waits and returns at once."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(recording_sleep):
    """Factory fixture: ResilientRequestClient over an httpx MockTransport.

    Usage:
        def test_something(make_client):
            client = make_client(lambda request: httpx.Response(200, json={...}))
    """
    def _create(
        handler: Callable,
        policy: Optional[RetryPolicy] = None,
        sleep=None,
        **kwargs,
    ) -> ResilientRequestClient:
        options = dict(
            base_url=TEST_BASE_URL,
            api_key="test-key",
            policy=policy or RetryPolicy(max_attempts=3, base_delay_ms=100, jitter_max_ms=50),
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
            sleep=sleep or recording_sleep,
            metrics_enabled=False,
        )
        options.update(kwargs)
        return ResilientRequestClient(**options)

    return _create


@pytest.fixture
def mock_generation_client():
    """Mock text-generation client for assistant tests."""
    return AsyncMock(spec=BaseTextGenerationClient)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client for unit tests (async)."""
    mock = AsyncMock()
    mock.set = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    return mock
