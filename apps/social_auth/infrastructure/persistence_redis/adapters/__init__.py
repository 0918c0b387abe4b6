"""Redis Adapters."""

from apps.social_auth.infrastructure.persistence_redis.adapters.document_store_redis import (
    RedisDocumentStore,
)
from apps.social_auth.infrastructure.persistence_redis.adapters.key_value_store_redis import (
    RedisKeyValueStore,
)

__all__ = ["RedisDocumentStore", "RedisKeyValueStore"]
