"""Redis Document Store.

DocumentStore 포트의 구현체입니다.

키 구조:
    - 문서: ``social_auth:doc:{collection}:{id}`` (JSON)
    - 컬렉션 ID 집합: ``social_auth:ids:{collection}``
    - 필드 인덱스: ``social_auth:idx:{collection}:{field}:{value}`` (SET of id)
"""

from __future__ import annotations

import json
import uuid
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from apps.social_auth.infrastructure.persistence_redis.constants import (
    DEFAULT_INDEXED_FIELDS,
    DOCUMENT_IDS_KEY_PREFIX,
    DOCUMENT_INDEX_KEY_PREFIX,
    DOCUMENT_KEY_PREFIX,
)

if TYPE_CHECKING:
    import redis.asyncio as aioredis


class RedisDocumentStore:
    """Redis 기반 JSON 문서 저장소."""

    def __init__(
        self,
        redis: "aioredis.Redis",
        *,
        indexed_fields: Iterable[str] = DEFAULT_INDEXED_FIELDS,
    ) -> None:
        self._redis = redis
        self._indexed_fields = tuple(indexed_fields)

    def _doc_key(self, collection: str, document_id: str) -> str:
        return f"{DOCUMENT_KEY_PREFIX}{collection}:{document_id}"

    def _ids_key(self, collection: str) -> str:
        return f"{DOCUMENT_IDS_KEY_PREFIX}{collection}"

    def _index_key(self, collection: str, field: str, value: Any) -> str:
        return f"{DOCUMENT_INDEX_KEY_PREFIX}{collection}:{field}:{value}"

    def _index_entries(self, collection: str, document: Mapping[str, Any]) -> list[str]:
        return [
            self._index_key(collection, field, document[field])
            for field in self._indexed_fields
            if document.get(field) is not None
        ]

    async def create(self, collection: str, document: Mapping[str, Any]) -> str:
        document_id = uuid.uuid4().hex
        stored = {key: value for key, value in document.items() if key != "id"}
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.set(self._doc_key(collection, document_id), json.dumps(stored))
            pipe.sadd(self._ids_key(collection), document_id)
            for index_key in self._index_entries(collection, stored):
                pipe.sadd(index_key, document_id)
            await pipe.execute()
        return document_id

    async def _load(self, collection: str, document_id: str) -> dict[str, Any] | None:
        raw = await self._redis.get(self._doc_key(collection, document_id))
        return json.loads(raw) if raw else None

    async def get_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        document = await self._load(collection, document_id)
        if document is None:
            return None
        document["id"] = document_id
        return document

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        return await self.query_by_fields(collection, {field: value})

    async def query_by_fields(
        self, collection: str, conditions: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        indexed = next((field for field in conditions if field in self._indexed_fields), None)
        if indexed is not None:
            ids = await self._redis.smembers(
                self._index_key(collection, indexed, conditions[indexed])
            )
        else:
            ids = await self._redis.smembers(self._ids_key(collection))

        ids = sorted(ids)
        if not ids:
            return []

        raws = await self._redis.mget([self._doc_key(collection, doc_id) for doc_id in ids])
        results = []
        for document_id, raw in zip(ids, raws):
            if not raw:
                continue
            document = json.loads(raw)
            if all(document.get(field) == value for field, value in conditions.items()):
                document["id"] = document_id
                results.append(document)
        return results

    async def update(
        self, collection: str, document_id: str, changes: Mapping[str, Any]
    ) -> None:
        existing = await self._load(collection, document_id)
        if existing is None:
            raise KeyError(f"{collection}/{document_id} not found")

        merged = {**existing, **{key: value for key, value in changes.items() if key != "id"}}
        stale = set(self._index_entries(collection, existing)) - set(
            self._index_entries(collection, merged)
        )
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.set(self._doc_key(collection, document_id), json.dumps(merged))
            for index_key in stale:
                pipe.srem(index_key, document_id)
            for index_key in self._index_entries(collection, merged):
                pipe.sadd(index_key, document_id)
            await pipe.execute()

    async def delete(self, collection: str, document_id: str) -> None:
        existing = await self._load(collection, document_id)
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._doc_key(collection, document_id))
            pipe.srem(self._ids_key(collection), document_id)
            for index_key in self._index_entries(collection, existing or {}):
                pipe.srem(index_key, document_id)
            await pipe.execute()
