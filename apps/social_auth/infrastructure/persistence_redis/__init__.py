"""Redis Persistence."""

from apps.social_auth.infrastructure.persistence_redis.adapters import (
    RedisDocumentStore,
    RedisKeyValueStore,
)
from apps.social_auth.infrastructure.persistence_redis.client import (
    get_document_redis,
    get_ephemeral_redis,
)

__all__ = [
    "RedisDocumentStore",
    "RedisKeyValueStore",
    "get_document_redis",
    "get_ephemeral_redis",
]
