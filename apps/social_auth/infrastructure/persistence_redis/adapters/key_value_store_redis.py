"""Redis Key-Value Store.

KeyValueStore 포트의 구현체입니다. 만료는 Redis TTL 에 맡기고,
pop 은 GETDEL 로 원자적으로 수행합니다.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from apps.social_auth.infrastructure.persistence_redis.constants import KEY_PREFIX

if TYPE_CHECKING:
    import redis.asyncio as aioredis


class RedisKeyValueStore:
    """Redis 기반 TTL 저장소."""

    def __init__(self, redis: "aioredis.Redis", *, key_prefix: str = KEY_PREFIX) -> None:
        self._redis = redis
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> dict[str, Any] | None:
        value = await self._redis.get(self._key(key))
        if not value:
            return None
        return json.loads(value)

    async def set(self, key: str, value: dict[str, Any], ttl_seconds: int) -> None:
        await self._redis.setex(self._key(key), ttl_seconds, json.dumps(value))

    async def delete(self, key: str) -> None:
        await self._redis.delete(self._key(key))

    async def pop(self, key: str) -> dict[str, Any] | None:
        value = await self._redis.getdel(self._key(key))
        if not value:
            return None
        return json.loads(value)

    async def sweep_expired(self) -> int:
        """Redis 가 TTL 로 직접 만료시키므로 정리할 항목이 없습니다."""
        return 0
