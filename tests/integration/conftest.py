"""Integration test fixtures (service checks and prerequisites).

Provides fixtures for checking if external services are available.
Integration tests are skipped if required services are not running.
"""

import os
import uuid

import pytest
import pytest_asyncio
from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

REDIS_TEST_URL = os.environ.get("REDIS_TEST_URL", "redis://localhost:6379/15")


@pytest_asyncio.fixture
async def real_async_redis():
    """Real AsyncRedis client on a scratch database.

    Skips the test if Redis is not reachable. Keys written under the test
    prefix are removed afterwards.
    """
    client = AsyncRedis.from_url(REDIS_TEST_URL, decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        await client.aclose()
        pytest.skip(f"Redis not available: {e}")

    yield client

    async for key in client.scan_iter(match="lesson-assistant-it:*"):
        await client.delete(key)
    await client.aclose()


@pytest.fixture
def learner_id() -> str:
    """Unique namespace so parallel runs never share keys."""
    return f"learner-{uuid.uuid4().hex[:8]}"
