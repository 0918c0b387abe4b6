"""In-Memory Persistence Adapters."""

from apps.social_auth.infrastructure.persistence_memory.document_store_memory import (
    InMemoryDocumentStore,
)
from apps.social_auth.infrastructure.persistence_memory.key_value_store_memory import (
    InMemoryKeyValueStore,
)

__all__ = ["InMemoryDocumentStore", "InMemoryKeyValueStore"]
