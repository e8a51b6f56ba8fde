"""
Key-value persistence collaborator.

The course core only needs ``get(key)`` and ``set(key, value)`` on string
values; what backs them is the host application's choice.

Implementations:
- InMemoryKeyValueStore: process-local dict (tests, single-session use)
- RedisKeyValueStore: namespaced keys in Redis, one namespace per learner
"""

from typing import Optional, Protocol, runtime_checkable

import structlog
from redis.asyncio import Redis as AsyncRedis

from lesson_assistant.config import Settings
from lesson_assistant.persistence.redis_client import RedisClient

logger = structlog.get_logger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Async string key-value store."""

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class InMemoryKeyValueStore:
    """Dict-backed store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class RedisKeyValueStore:
    """
    Redis-backed store.

    Keys are stored as ``{prefix}:{namespace}:{key}`` so several learners can
    share one database. Values never expire.
    """

    def __init__(self, redis_client: AsyncRedis, prefix: str, namespace: str = "default"):
        """
        Initialize store.

        Args:
            redis_client: AsyncRedis client (decode_responses=True)
            prefix: Application key prefix
            namespace: Learner or session identifier
        """
        if not prefix or not namespace:
            raise ValueError("prefix and namespace must not be empty")
        self.redis = redis_client
        self.prefix = prefix
        self.namespace = namespace

    @classmethod
    def from_settings(cls, settings: Settings, namespace: str = "default") -> "RedisKeyValueStore":
        return cls(
            RedisClient.get_async_client(settings),
            prefix=settings.PROGRESS_KEY_PREFIX,
            namespace=namespace,
        )

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(self._key(key))
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self._key(key), value)
        logger.debug("Stored value", key=self._key(key), length=len(value))
