"""
Persistence layer.

- store.py: KeyValueStore protocol with in-memory and Redis implementations
- redis_client.py: Async Redis connection pooling

Storage Strategy:
- Plain string values under ``{prefix}:{namespace}:{key}``
- No TTL: learner progress is kept until overwritten
"""

from lesson_assistant.persistence.redis_client import RedisClient
from lesson_assistant.persistence.store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
)

__all__ = [
    "RedisClient",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
]
